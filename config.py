# config.py

import os
from typing import Any, Dict, Optional

from openai import OpenAI

# Try to use Streamlit secrets when available
try:
    import streamlit as st
    _SECRETS: Dict[str, Any] = st.secrets
except Exception:
    _SECRETS = {}


DEFAULT_TEXT_MODEL = "gpt-4o-mini"
DEFAULT_IMAGE_MODEL = "gpt-image-1"
DEFAULT_WEATHER_MODEL = "gpt-4o-mini"


class ConfigError(Exception):
    pass


def get_setting(name: str, default: Optional[str] = None) -> Optional[str]:
    """
    Look a setting up in Streamlit secrets first, then in the environment.
    A missing or unreadable secrets.toml counts as "not set".
    """
    try:
        value = _SECRETS.get(name)
    except Exception:
        value = None
    return value or os.getenv(name) or default


def get_openai_api_key() -> str:
    key = get_setting("OPENAI_API_KEY")
    if not key:
        raise ConfigError("OPENAI_API_KEY is not set.")
    return key


def get_text_model() -> str:
    return get_setting("OPENAI_TEXT_MODEL", DEFAULT_TEXT_MODEL)


def get_image_model() -> str:
    return get_setting("OPENAI_IMAGE_MODEL", DEFAULT_IMAGE_MODEL)


def get_weather_model() -> str:
    return get_setting("OPENAI_WEATHER_MODEL", DEFAULT_WEATHER_MODEL)


def get_log_level() -> str:
    return str(get_setting("LOG_LEVEL", "INFO")).upper()


def build_openai_client():
    """Shared OpenAI client for every agent in a session."""
    return OpenAI(api_key=get_openai_api_key())
