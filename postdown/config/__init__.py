from .loader import find_config, load_config
from .models import PostdownConfig, RenderConfig

__all__ = [
    "PostdownConfig",
    "RenderConfig",
    "find_config",
    "load_config",
]
