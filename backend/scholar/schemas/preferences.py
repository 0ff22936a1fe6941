"""Preference Schemas: theme read/update and the view catalogue."""

from pydantic import BaseModel

from scholar.core.domain_types import AppView, OperationKind, Theme


class PreferencesResponse(BaseModel):
    theme: Theme


class ThemeUpdate(BaseModel):
    theme: Theme


class ViewInfo(BaseModel):
    view: AppView
    operations: list[OperationKind]
    default: bool = False
