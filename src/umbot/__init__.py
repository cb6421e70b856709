from .core.app_context import AppContext
from .core.bot import Bot
from .core.console import BotTest
from .controller import BotController, BaseBotController
from .config.loader import load_config
from .config.factory import ComponentFactory

__version__ = '0.1.0'

__all__ = [
    'AppContext',
    'Bot',
    'BotTest',
    'BotController',
    'BaseBotController',
    'load_config',
    'ComponentFactory',
]
