"""Исключения пакета."""


class UmbotError(Exception):
    """Базовое исключение umbot."""


class ConfigError(UmbotError, ValueError):
    """Конфигурация не найдена или не прошла валидацию."""


class BotError(UmbotError):
    """Запрос платформы не удалось обработать."""
