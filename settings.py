"""settings.py — Default reading rate, persisted in .env."""

import os
from pathlib import Path

from dotenv import load_dotenv, set_key

ENV_FILE = Path(".env")
WPM_KEY = "SPEEDREAD_WPM"

DEFAULT_WPM = 300
MIN_WPM = 50
MAX_WPM = 1500


def load_default_wpm(env_file: Path = ENV_FILE) -> int:
    """Load SPEEDREAD_WPM from the environment / .env. Falls back to DEFAULT_WPM."""
    load_dotenv(env_file)
    raw = os.getenv(WPM_KEY, "").strip()
    if not raw:
        return DEFAULT_WPM
    try:
        wpm = int(raw)
    except ValueError:
        return DEFAULT_WPM
    return wpm if MIN_WPM <= wpm <= MAX_WPM else DEFAULT_WPM


def save_default_wpm(wpm: int, env_file: Path = ENV_FILE) -> None:
    """Persist wpm to .env for future runs."""
    env_file.touch(exist_ok=True)
    set_key(str(env_file), WPM_KEY, str(wpm))
    os.environ[WPM_KEY] = str(wpm)
    print(f"  Saved {WPM_KEY}={wpm} to {env_file}")
