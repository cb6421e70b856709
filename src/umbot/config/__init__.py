from .models import AppConfig, DatabaseConfig, LoggingConfig, PlatformParams
from .loader import load_config

__all__ = [
    'AppConfig',
    'DatabaseConfig',
    'LoggingConfig',
    'PlatformParams',
    'load_config',
]
