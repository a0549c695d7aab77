"""
Default configuration values for tubepick.

Note: These are overridable via config/loader.py which supports environment
variables (TUBEPICK_CLIENT), project config, and user config.
"""

# Client identity used for the first catalogue fetch
DEFAULT_PRIMARY_CLIENT = "mobile"

# Client identity used for the single retry (fetch and URL failures)
DEFAULT_ALTERNATE_CLIENT = "web"

# Extra identities tried, in order, only to find a muxed stream URL
DEFAULT_MUXED_CLIENTS = ("web", "android")

# Default selection
DEFAULT_QUALITY = 720
DEFAULT_CODEC = "h264"

# Session/player handle validity window
SESSION_REFRESH_MINUTES = 15

# Timeouts (seconds)
METADATA_TIMEOUT = 30
PROBE_TIMEOUT = 10

# Upstream URLs stay valid for roughly this long
URL_VALIDITY_HOURS = 6
