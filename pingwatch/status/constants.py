"""Constants for status derivation and windowing."""

# Latency above this value (strictly greater) classifies a probe as High Latency.
DEFAULT_HIGH_LATENCY_THRESHOLD_MS = 100.0

# Most recent probes kept per endpoint for the recent-probe list.
RECENT_WINDOW_SIZE = 50

# Most recent probes with a measured latency, shared by chart and average.
CHART_WINDOW_SIZE = 50

# Most recent probes counted for the status distribution.
DISTRIBUTION_WINDOW_SIZE = 100

COMPONENT_STATUS = "status"
