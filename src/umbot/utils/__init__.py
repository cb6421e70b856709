from .logger import get_logger
from . import text

__all__ = [
    'get_logger',
    'text',
]
