"""Configuration for detection-point."""
from pathlib import Path
from dotenv import load_dotenv
import os

load_dotenv()  # loads .env from project root (or cwd) if present

# Paths
DATA_DIR = Path(os.environ.get("DP_DATA_DIR", Path.home() / ".detection-point"))
LOG_DIR = DATA_DIR / "logs"

# Display
DISPLAY = os.environ.get("DISPLAY", ":99")
# Used when the X display cannot be queried for its real size
DEFAULT_SCREEN_WIDTH = int(os.environ.get("DP_SCREEN_WIDTH", "1280"))
DEFAULT_SCREEN_HEIGHT = int(os.environ.get("DP_SCREEN_HEIGHT", "720"))
PLATFORM = os.environ.get("DP_PLATFORM") or None  # free-form label: ios|android|linux

# Reserved keywords sit this fraction of min(width, height) away from the edges
RESERVED_MARGIN_RATIO = float(os.environ.get("DP_RESERVED_MARGIN_RATIO", "0.2"))

# Element lookup backend selection
ELEMENT_BACKEND = os.environ.get("DP_ELEMENT_BACKEND", "xlib")  # xlib|none

# Network
PREFERRED_INTERFACE = os.environ.get("DP_PREFERRED_INTERFACE") or None  # e.g. en0, wlan0

# Daemon
DAEMON_HOST = os.environ.get("DP_DAEMON_HOST", "127.0.0.1")
DAEMON_PORT = int(os.environ.get("DP_DAEMON_PORT", "18791"))

DEBUG = os.environ.get("DP_DEBUG", "0") in ("1", "true", "yes")


def ensure_data_dir():
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    LOG_DIR.mkdir(parents=True, exist_ok=True)
