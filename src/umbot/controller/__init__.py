from .bot_controller import BotController, BaseBotController

__all__ = [
    'BotController',
    'BaseBotController',
]
