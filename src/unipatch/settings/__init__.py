from .models import (
    DisplaySettings,
    LogLevel,
    ParseSettings,
    RenderSettings,
    Settings,
)
from .loader import load_settings

__all__ = [
    "DisplaySettings",
    "LogLevel",
    "ParseSettings",
    "RenderSettings",
    "Settings",
    "load_settings",
]
