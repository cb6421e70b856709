from .app_context import (
    AppContext,
    Command,
    T_ALISA,
    T_MARUSIA,
    T_VK,
    T_TELEGRAM,
    T_VIBER,
    T_SMARTAPP,
    T_USER_APP,
    WELCOME_INTENT_NAME,
    HELP_INTENT_NAME,
)

__all__ = [
    'AppContext',
    'Command',
    'T_ALISA',
    'T_MARUSIA',
    'T_VK',
    'T_TELEGRAM',
    'T_VIBER',
    'T_SMARTAPP',
    'T_USER_APP',
    'WELCOME_INTENT_NAME',
    'HELP_INTENT_NAME',
]
