"""REST catalog endpoint and decoding constants."""

# Base URL
BASE_URL = "https://rickandmortyapi.com/api"

# Collection endpoints (relative to BASE_URL)
CHARACTER_ENDPOINT = "character"
EPISODE_ENDPOINT = "episode"

# Query parameter names for the list endpoint
PAGE_PARAM = "page"
NAME_FILTER_PARAM = "name"

# Network
DEFAULT_TIMEOUT_SECONDS = 30

# Default values substituted for missing or null fields
UNKNOWN_NAME = "Unknown"
UNKNOWN_VALUE = "unknown"
