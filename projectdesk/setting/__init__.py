from .setting import (
    AISettings,
    AppSettings,
    DatabaseSettings,
    ServerSettings,
    get_config_path,
    get_settings,
    load_settings,
)

__all__ = [
    "AISettings",
    "AppSettings",
    "DatabaseSettings",
    "ServerSettings",
    "get_config_path",
    "get_settings",
    "load_settings",
]
