"""Preference API routes: read, set and toggle dark mode."""
from fastapi import APIRouter, Depends

from api.deps import get_preference_store
from capture_core.preferences import PreferenceStore
from schemas.preferences import DarkModeResponse, DarkModeUpdate

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("/dark-mode", response_model=DarkModeResponse)
def get_dark_mode(prefs: PreferenceStore = Depends(get_preference_store)) -> DarkModeResponse:
    """Current dark mode (loaded once at startup, then kept in memory)."""
    return DarkModeResponse(dark_mode=prefs.dark_mode, persisted=prefs.persisted)


@router.put("/dark-mode", response_model=DarkModeResponse)
def set_dark_mode(
    body: DarkModeUpdate,
    prefs: PreferenceStore = Depends(get_preference_store),
) -> DarkModeResponse:
    """Set dark mode. A failed write is not an error; persisted reports it."""
    persisted = prefs.save(body.dark_mode)
    return DarkModeResponse(dark_mode=prefs.dark_mode, persisted=persisted)


@router.post("/dark-mode/toggle", response_model=DarkModeResponse)
def toggle_dark_mode(prefs: PreferenceStore = Depends(get_preference_store)) -> DarkModeResponse:
    """Flip dark mode and persist it."""
    value = prefs.toggle()
    return DarkModeResponse(dark_mode=value, persisted=prefs.persisted)
