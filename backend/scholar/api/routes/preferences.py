"""Preference Routes: theme preference and the fixed catalogue of views."""

from fastapi import APIRouter, Depends

from scholar.api.dependencies import get_preferences
from scholar.core.domain_types import DEFAULT_VIEW, VIEW_OPERATIONS
from scholar.core.preferences import PreferenceState
from scholar.schemas.preferences import PreferencesResponse, ThemeUpdate, ViewInfo

router = APIRouter(prefix="/api/v1", tags=["preferences"])


@router.get("/preferences", response_model=PreferencesResponse)
async def get_preferences_route(
    preferences: PreferenceState = Depends(get_preferences),
):
    return PreferencesResponse(theme=preferences.theme)


@router.put("/preferences", response_model=PreferencesResponse)
async def update_preferences(
    body: ThemeUpdate, preferences: PreferenceState = Depends(get_preferences),
):
    """Persist a new theme (single mutation entry point)."""
    return PreferencesResponse(theme=preferences.set_theme(body.theme))


@router.get("/views", response_model=list[ViewInfo])
async def list_views():
    return [
        ViewInfo(view=view, operations=list(ops), default=view == DEFAULT_VIEW)
        for view, ops in VIEW_OPERATIONS.items()
    ]
