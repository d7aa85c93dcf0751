"""Constants for the RGBW sync client."""

KEY_RED = "red"
KEY_GREEN = "green"
KEY_BLUE = "blue"
KEY_WHITE = "white"
KEY_STATUS = "status"
KEY_MESSAGE = "message"

WIRE_KEYS = (KEY_RED, KEY_GREEN, KEY_BLUE, KEY_WHITE)
CHROMATIC_KEYS = (KEY_RED, KEY_GREEN, KEY_BLUE)

CHANNEL_MIN = 0
CHANNEL_MAX = 255

PATH_WSINFO = "/wsinfo"
PATH_COLOR = "/color"
PATH_WS_ROOT = "/"

DEFAULT_PORT_WS = 8001
DEFAULT_PAGE_URL = "http://localhost:8000/"
DEFAULT_RECONNECT_DELAY = 5.0
DEFAULT_HEARTBEAT = 30.0
DEFAULT_DISCOVERY_TIMEOUT = 5.0

SCHEME_WS = "ws"
SCHEME_WSS = "wss"
SECURE_PAGE_SCHEMES = ("https",)
