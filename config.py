"""
config.py — Reader Configuration
=================================
Module-level constants for the reader.  Values come from the environment
(or a `.env` file in the working directory, loaded with python-dotenv) so a
local install can change the default speed, the storage location or the
server port without touching code.

    RSVP_DEFAULT_WPM     default reading speed (must be one of WPM_OPTIONS)
    RSVP_STORE_PATH      JSON file backing the persistent key/value store
    RSVP_SCAN_COUNT      how many clipboard entries are scanned at start
    RSVP_HOST / RSVP_PORT
    RSVP_LOG_LEVEL
"""

import os

from dotenv import load_dotenv

load_dotenv()


# ---------------------------------------------------------------------------
# Speed menu (words per minute)
# ---------------------------------------------------------------------------
WPM_OPTIONS = (300, 400, 500, 600, 700)
FALLBACK_WPM = 400


def _env_int(name: str, default: int) -> int:
    """Integer from the environment; `default` when unset or malformed."""
    raw = os.getenv(name, "").strip()
    try:
        return int(raw)
    except ValueError:
        return default


def _default_wpm() -> int:
    value = _env_int("RSVP_DEFAULT_WPM", FALLBACK_WPM)
    return value if value in WPM_OPTIONS else FALLBACK_WPM


DEFAULT_WPM = _default_wpm()


# ---------------------------------------------------------------------------
# Document eligibility
# ---------------------------------------------------------------------------
MIN_WORDS            = 10
CLIPBOARD_SCAN_COUNT = max(1, _env_int("RSVP_SCAN_COUNT", 6))
TITLE_LENGTH         = 60


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------
STORE_PATH    = os.getenv("RSVP_STORE_PATH", os.path.expanduser("~/.rsvp_reader.json"))
SPEED_KEY     = "saved_wpm"
BLACKLIST_KEY = "deleted_texts"


# ---------------------------------------------------------------------------
# Web host
# ---------------------------------------------------------------------------
HOST      = os.getenv("RSVP_HOST", "127.0.0.1")
PORT      = _env_int("RSVP_PORT", 5000)
LOG_LEVEL = os.getenv("RSVP_LOG_LEVEL", "INFO").upper()
