"""Route dependencies — app-scoped collaborators stored on app.state."""

from fastapi import Request

from miniasset.config import Settings
from miniasset.infrastructure.asset_factory import AssetFactory


def get_asset_factory(request: Request) -> AssetFactory:
    return request.app.state.asset_factory


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
