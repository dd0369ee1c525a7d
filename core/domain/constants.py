"""
Domain constants - API sentinels, preference keys, history limits.
Centralized here for easy modification.
"""

# === API ===
# Every response body is {"code": int, "msg": str, "data": ...}; code 1 is the only success
SUCCESS_CODE = 1

# === Preference keys ===
KEY_TOKEN = "token"
KEY_USER_INFO = "user_info"
KEY_LOCATION = "user_location"
KEY_SELECT_CITY = "select_city"
KEY_CITY_SELECT_HIS = "city_select_his"
KEY_IS_MORE_MODE = "is_more_mode"
KEY_SEARCH_PLAYER_HIS = "search_player_his"

ALL_PREFERENCE_KEYS = (
    KEY_TOKEN,
    KEY_USER_INFO,
    KEY_LOCATION,
    KEY_SELECT_CITY,
    KEY_CITY_SELECT_HIS,
    KEY_IS_MORE_MODE,
    KEY_SEARCH_PLAYER_HIS,
)

# === City ===
DEFAULT_CITY_ID = "1"
DEFAULT_CITY_NAME = "北京市"

# Limits
MAX_CITY_HISTORY = 5
MAX_SEARCH_HISTORY = 20
MIN_PASSWORD_LENGTH = 6

# Scores selectable on the score entry sheet
SCORE_OPTIONS = (
    "0:0", "2:0", "2:1", "1:2", "0:2",
    "3:0", "3:1", "3:2", "2:3", "1:3", "0:3",
    "4:0", "4:1", "4:2", "4:3", "3:4", "2:4", "1:4", "0:4",
)

# Fallback message when the server gives none
LOGIN_FAILED_MESSAGE = "登录失败"
