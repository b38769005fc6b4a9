"""
Environment-driven settings.

Values come from the process environment; a `.env` file in the working
directory is loaded first without overriding variables that are already set.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

_TRUTHY = ("true", "1", "yes", "on")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


def _env_path(name: str, default: Optional[str]) -> Optional[Path]:
    raw = os.getenv(name, default or "")
    return Path(raw).expanduser() if raw.strip() else None


@dataclass(frozen=True)
class Settings:
    offline_mode: bool = True
    openai_api_key: str = ""
    model_name: str = "gpt-4o-mini"
    sound_enabled: bool = True
    sound_dir: Optional[Path] = Path("assets/sounds")
    image_dir: Optional[Path] = Path("assets/images")
    wordlist_dir: Optional[Path] = None
    log_level: str = "INFO"
    log_json: bool = False

    @property
    def llm_enabled(self) -> bool:
        """LLM calls need OFFLINE_MODE=false and an API key."""
        return not self.offline_mode and bool(self.openai_api_key)


def load_settings(dotenv: bool = True) -> Settings:
    """Read `Settings` from the environment (and `.env` when `dotenv` is set)."""
    if dotenv:
        load_dotenv(find_dotenv(usecwd=True), override=False)
    return Settings(
        offline_mode=_env_bool("OFFLINE_MODE", True),
        openai_api_key=os.getenv("OPENAI_API_KEY", "").strip(),
        model_name=os.getenv("MODEL_NAME", "").strip() or "gpt-4o-mini",
        sound_enabled=_env_bool("HANGMAN_SOUND", True),
        sound_dir=_env_path("HANGMAN_SOUND_DIR", "assets/sounds"),
        image_dir=_env_path("HANGMAN_IMAGE_DIR", "assets/images"),
        wordlist_dir=_env_path("HANGMAN_WORDLIST_DIR", None),
        log_level=(os.getenv("LOG_LEVEL", "").strip() or "INFO").upper(),
        log_json=_env_bool("LOG_FORMAT_JSON", False),
    )
