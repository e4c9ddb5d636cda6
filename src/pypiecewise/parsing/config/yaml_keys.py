"""Constants used for YAML parsing of approximation configurations."""

# Top-level keys
NAME_KEY = "name"
FUNCTION_KEY = "function"
SEGMENTS_KEY = "segments"
INTERVAL_KEY = "interval"
FLAT_SEGMENTS_KEY = "flat_segments"
SLOPE_TOLERANCE_KEY = "slope_tolerance"

# Function keys
EXPRESSION_KEY = "expression"
VARIABLE_KEY = "variable"
PARAMETERS_KEY = "parameters"

# Flat segment policy values
SKIP_KEY = "skip"
REJECT_KEY = "reject"

# Automatically export all constants (those that don't start with underscore)
__all__ = [name for name in globals() if not name.startswith('_') and name.isupper()]
