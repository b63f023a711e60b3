"""Default tariff, segmentation and analysis constants.

These are only defaults; ``Settings`` overrides every value from the
environment so the engine can be recalibrated without a rebuild.
"""

# Residential tariff: inclusive upper limits (kWh) and rates per kWh
TARIFF_LOW_LIMIT = 20.0
TARIFF_MID_LIMIT = 50.0
TARIFF_RATE_LOW = 103.0
TARIFF_RATE_MID = 141.0
TARIFF_RATE_HIGH = 171.0

# Household segmentation tiers (kWh)
SEGMENT_LOW_LIMIT = 30.0
SEGMENT_HIGH_LIMIT = 80.0
SEGMENT_LABELS = ("Low", "Medium", "High")
SEGMENT_METHODS = ("threshold", "kmeans")

ANOMALY_STD_MULTIPLIER = 2.0

# Segmentation and anomaly detection refuse to run below this many reports
MIN_REPORTS_FOR_ANALYSIS = 3

HIGH_CONSUMPTION_KWH = 100.0

UNKNOWN_CATEGORY = "Unknown"
CURRENCY = "RWF"
