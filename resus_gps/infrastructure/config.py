import os
import logging

import streamlit as st

from resus_gps.domain.protocols import DEFAULT_PROTOCOL_ROUTE

logger = logging.getLogger(__name__)


def get_secret(name: str, default: str | None = None) -> str | None:
    # Prefer Streamlit secrets if a secrets file is present
    try:
        if name in st.secrets:
            return str(st.secrets.get(name))
    except Exception as e:
        logger.debug("Streamlit secrets unavailable for %s: %s", name, e)
    return os.environ.get(name, default)


def _number(name: str, default, cast):
    raw = get_secret(name)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("Invalid %s=%r, using default %s", name, raw, default)
        return default


class Settings:
    @property
    def log_level(self) -> str:
        return (get_secret("LOG_LEVEL", "INFO") or "INFO").upper()

    @property
    def display_threshold(self) -> float:
        value = _number("RESUS_DISPLAY_THRESHOLD", 0.3, float)
        if not 0.0 <= value <= 1.0:
            logger.warning("RESUS_DISPLAY_THRESHOLD=%s outside [0, 1], using 0.3", value)
            return 0.3
        return value

    @property
    def default_protocol_route(self) -> str:
        return get_secret("RESUS_DEFAULT_ROUTE", DEFAULT_PROTOCOL_ROUTE) or DEFAULT_PROTOCOL_ROUTE

    @property
    def max_differentials(self) -> int:
        value = _number("RESUS_MAX_DIFFERENTIALS", 10, int)
        if value < 1:
            logger.warning("RESUS_MAX_DIFFERENTIALS=%s must be positive, using 10", value)
            return 10
        return value
