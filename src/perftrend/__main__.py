from perftrend.cli import main

raise SystemExit(main())
