from .colors import Palette, StatusClass, palette_for, status_class
from .config import Settings, get_settings
from .errors import ListenerError, ShellServeError, TemplateLoadError

__all__ = [
    "Palette",
    "StatusClass",
    "palette_for",
    "status_class",
    "Settings",
    "get_settings",
    "ListenerError",
    "ShellServeError",
    "TemplateLoadError",
]
