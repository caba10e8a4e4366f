"""Constants and configuration values for the Boomlings (Geometry Dash) servers."""

import os

# Server configuration
DEFAULT_BASE_URL = os.environ.get("BOOMLINGS_BASE_URL", "http://www.boomlings.com/database")
DEFAULT_TIMEOUT = float(os.environ.get("BOOMLINGS_TIMEOUT", "30"))
DEFAULT_PROXY = os.environ.get("BOOMLINGS_PROXY") or None

# Request defaults (Geometry Dash 2.1, binary version 33)
SECRET = os.environ.get("BOOMLINGS_SECRET", "Wmfd2893gb7")
GAME_VERSION = 21
BINARY_VERSION = 33

# Endpoints
DOWNLOAD_LEVEL_PATH = "/downloadGJLevel22.php"
GET_LEVELS_PATH = "/getGJLevels21.php"
GET_SONG_INFO_PATH = "/getGJSongInfo.php"
GET_USER_INFO_PATH = "/getGJUserInfo20.php"
GET_USERS_PATH = "/getGJUsers20.php"
GET_COMMENTS_PATH = "/getGJComments21.php"
GET_ACCOUNT_COMMENTS_PATH = "/getGJAccountComments20.php"

# Response grammar
NOT_FOUND = "-1"
SECTION_SEPARATOR = "#"
RECORD_SEPARATOR = "|"
SONG_SEPARATOR = "~:~"
# Level comments are listed as comment:user pairs
COMMENT_USER_SEPARATOR = ":"
# Sent in place of the user of a comment when there is no user data
EMPTY_COMMENT_USER = "1~~9~~10~~11~~14~~15~~16~"

# Wire formats of the individual objects
LEVEL_DELIMITER = ":"
CREATOR_DELIMITER = ":"
SONG_DELIMITER = "~|~"
PAGE_DELIMITER = ":"
USER_DELIMITER = ":"
COMMENT_DELIMITER = "~"

# Level password obfuscation
LEVEL_PASSWORD_XOR_KEY = "26364"
PASSWORD_NO_COPY = "0"
PASSWORD_FREE_COPY = "Aw=="

# HTTP statuses worth retrying. 429 is left out: the servers answer it with
# an hour long ban (retry-after=3600).
RETRY_STATUSES = (500, 502, 503, 504)

# Profile links; the servers only send the name or channel id
YOUTUBE_URL = "https://www.youtube.com/channel/{}"
TWITCH_URL = "https://www.twitch.tv/{}"
TWITTER_URL = "https://www.twitter.com/{}"
