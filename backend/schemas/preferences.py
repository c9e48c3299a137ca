"""Pydantic schemas for preference API."""
from pydantic import BaseModel


class DarkModeUpdate(BaseModel):
    """Payload for setting dark mode."""

    dark_mode: bool


class DarkModeResponse(BaseModel):
    """Current dark mode; persisted is False when the last write did not reach storage."""

    dark_mode: bool
    persisted: bool = True
