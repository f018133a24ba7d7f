"""Configuration constants for dose calculation."""

# Weight bands (kg) for the recommended daily dose.
# Below the light limit the "light" factor applies, above the heavy limit the "heavy" one.
LIGHT_WEIGHT_LIMIT_KG = 25.0
HEAVY_WEIGHT_LIMIT_KG = 120.0

# Numpy calendar unit used for every day-level array.
DAY_UNIT = "D"
