"""Color-coded debug logging by category.

Enable: set DP_DEBUG=1 or pass --debug to the daemon.
Logs to both stderr (colored) and a rolling log file.

Categories & colors:
  🟦 BLUE    — daemon lifecycle, config, startup
  🟨 YELLOW  — current point changes and reserved keyword resolution
  🟩 GREEN   — element lookups
  🟪 PURPLE  — network interface lookups
  🟥 RED     — errors and warnings
  🟧 ORANGE  — HTTP requests (MCP proxy ↔ daemon)
"""
import json
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from . import config

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"

COLORS = {
    "DAEMON":  "\033[34m",       # Blue
    "POINT":   "\033[33m",       # Yellow
    "ELEMENT": "\033[32m",       # Green
    "NET":     "\033[35m",       # Purple/Magenta
    "ERROR":   "\033[31m",       # Red
    "HTTP":    "\033[38;5;208m", # Orange (256-color)
}

# Emoji prefixes for file logs (no ANSI)
EMOJI = {
    "DAEMON":  "🟦",
    "POINT":   "🟨",
    "ELEMENT": "🟩",
    "NET":     "🟪",
    "ERROR":   "🟥",
    "HTTP":    "🟧",
}

MAX_LOG_BYTES = 10 * 1024 * 1024

_debug_enabled = False
_log_file = None
_log_path = None


def is_enabled() -> bool:
    return _debug_enabled


def init(enabled: bool = None, log_dir: Path = None):
    """Initialize debug logging. Call once at daemon startup."""
    global _debug_enabled, _log_file, _log_path

    if enabled is None:
        enabled = config.DEBUG

    _debug_enabled = enabled

    if not enabled:
        return

    log_dir = log_dir or config.LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    _log_path = log_dir / "debug.log"

    if _log_path.exists() and _log_path.stat().st_size > MAX_LOG_BYTES:
        _log_path.rename(log_dir / f"debug.{int(time.time())}.log")

    _log_file = open(_log_path, "a", buffering=1)  # line-buffered

    log("DAEMON", f"Debug logging enabled. Log file: {_log_path}")


def log(category: str, message: str, data: dict = None):
    """Log a debug message with category color coding."""
    if not _debug_enabled:
        return

    ts = datetime.now(timezone.utc).strftime("%H:%M:%S.%f")[:-3]
    cat = category.upper()

    color = COLORS.get(cat, RESET)
    line = f"{DIM}{ts}{RESET} {color}{BOLD}[{cat:7s}]{RESET} {color}{message}{RESET}"
    if data:
        data_str = json.dumps(data, indent=2, default=str)
        line += "\n" + "\n".join(f"  {color}{l}{RESET}" for l in data_str.split("\n"))
    print(line, file=sys.stderr, flush=True)

    emoji = EMOJI.get(cat, "  ")
    file_line = f"{ts} {emoji} [{cat:7s}] {message}"
    if data:
        file_line += f"\n{json.dumps(data, indent=2, default=str)}"
    if _log_file:
        _log_file.write(file_line + "\n")


def log_point(action: str, coordinates: str, detail: str = ""):
    """Log a change to, or resolution of, a screen point."""
    log("POINT", f"{action} → {coordinates}" + (f" — {detail}" if detail else ""))


def log_element(x: float, y: float, element: dict | None, backend: str):
    """Log an element lookup result."""
    if element is None:
        log("ELEMENT", f"({x:g}, {y:g}) via {backend}: nothing found")
    else:
        log("ELEMENT", f"({x:g}, {y:g}) via {backend}: {element.get('name') or element.get('id')}")


def log_network(message: str, success: bool = True):
    status = "✓" if success else "✗"
    log("NET", f"{status} {message}")


def log_http(method: str, path: str, status: int, duration_ms: float):
    """Log HTTP request to daemon."""
    log("HTTP", f"{method} {path} → {status} ({duration_ms:.0f}ms)")


def close():
    """Flush and close log file."""
    global _log_file
    if _log_file:
        _log_file.close()
        _log_file = None
