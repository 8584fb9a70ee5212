"""Constants for the ping data source."""

# HTTP Status Code Ranges
HTTP_STATUS_OK_MIN = 200
HTTP_STATUS_OK_MAX = 300
HTTP_STATUS_BAD_REQUEST = 400
HTTP_STATUS_SERVER_ERROR_MIN = 500
HTTP_STATUS_SERVER_ERROR_MAX = 600

# Ping data server routes
PING_DATA_PATH = "/ping-data"
ENV_CONFIG_PATH = "/env-config"

# Key of the comma-separated endpoint list in the env-config payload
TARGET_URLS_KEY = "TARGET_URLS"

DEFAULT_BASE_URL = "http://localhost:8000"
DEFAULT_FETCH_LIMIT = 1000
DEFAULT_TIMEOUT_SECONDS = 10.0

COMPONENT_SOURCE = "source"
