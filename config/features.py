"""
Feature Flags - Easy on/off toggle for features.
Change values here to enable/disable functionality.
"""

import os


class Features:
    """Feature toggles - set via env vars or defaults"""

    # === EVENT HISTORY ===
    # "true" keeps the legacy behavior: a broken event-history response becomes an empty list.
    # "false" surfaces it as an error result like every other repository call.
    EVENT_HISTORY_LENIENT_PARSE: bool = os.getenv("EVENT_HISTORY_LENIENT_PARSE", "true").lower() == "true"

    # === DEBUG ===
    DEBUG_MODE: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_HTTP_TRAFFIC: bool = os.getenv("LOG_HTTP_TRAFFIC", "false").lower() == "true"

    @classmethod
    def to_dict(cls) -> dict:
        """Get all features as dict (useful for logging)"""
        return {
            "event_history_lenient_parse": cls.EVENT_HISTORY_LENIENT_PARSE,
            "debug_mode": cls.DEBUG_MODE,
            "log_http_traffic": cls.LOG_HTTP_TRAFFIC,
        }


# Shortcut
features = Features()
