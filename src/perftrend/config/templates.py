"""Templates for generated perftrend configuration files."""

DEFAULT_CONFIG = """# perftrend configuration
# Input sizes: range_start, then multiplied by range_multi until range_limit.
range_start: 1
range_limit: 10000
range_multi: 8
# Explicit sizes (non-empty list overrides the range above)
sizes: []

# Timing
repeat: 1
warmups: 0
collect_garbage: true

# Output: text, json or markdown
format: "text"
precision: 2

# Fail (exit 1) when the best model explains less than this share of variance
min_residual:
"""

MINIMAL_CONFIG = """# perftrend configuration (minimal)
range_start: 1
range_limit: 10000
range_multi: 8
repeat: 1
"""

CONFIG_PRESETS = {
    "full": DEFAULT_CONFIG,
    "minimal": MINIMAL_CONFIG,
}
