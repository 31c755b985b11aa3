from .loader import load_config
from .models import ApiConfig, GitDataConfig

__all__ = [
    "ApiConfig",
    "GitDataConfig",
    "load_config",
]
