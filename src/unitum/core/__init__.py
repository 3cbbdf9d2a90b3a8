"""Core value algebra: dimensions, converters, units, quantities and ranges."""
