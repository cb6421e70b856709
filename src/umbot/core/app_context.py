"""Контекст приложения: конфигурация, логгер, хранилище и команды навыка."""
import re
from dataclasses import dataclass
from typing import Any, Callable

from umbot.config.models import AppConfig, PlatformParams
from umbot.protocols import LoggerProtocol, StorageProtocol

T_ALISA = "alisa"
T_MARUSIA = "marusia"
T_VK = "vk"
T_TELEGRAM = "telegram"
T_VIBER = "viber"
T_SMARTAPP = "smart_app"
T_USER_APP = "user_application"

WELCOME_INTENT_NAME = "welcome"
HELP_INTENT_NAME = "help"

# Конструкции, которые могут привести к катастрофическому backtracking
DANGEROUS_PATTERNS = (
    re.compile(r"\(\w+\+\)\+"),
    re.compile(r"\(\w+\*\)\*"),
    re.compile(r"\(\w+\+\)\*"),
    re.compile(r"\(\w+\*\)\+"),
    re.compile(r"\[[^\]]*\+\]"),
    re.compile(r"(\w\+|\w\*){3,}"),
)


@dataclass(frozen=True)
class Command:
    """Зарегистрированная команда навыка."""
    slots: tuple[str, ...]
    is_pattern: bool = False
    cb: Callable[[str, Any], Any] | None = None


class AppContext:
    """
    Явный контекст приложения вместо глобального состояния.

    Передаётся в адаптеры платформ, компоненты и модели. Содержит
    конфигурацию, логгер, хранилище данных, тип текущей платформы
    и реестр пользовательских команд.
    """

    def __init__(
        self,
        config: AppConfig,
        logger: LoggerProtocol,
        storage: StorageProtocol | None = None,
        app_type: str | None = None
    ) -> None:
        """
        Parameters
        ----------
        config : AppConfig
            Конфигурация приложения.
        logger : LoggerProtocol
            Логгер приложения.
        storage : StorageProtocol, optional
            Хранилище моделей (FileStorage или MongoStorage).
        app_type : str, optional
            Тип платформы. По умолчанию берётся из конфигурации.
        """
        self.config = config
        self.logger = logger
        self.storage = storage
        self.app_type = app_type or config.platform_type
        self.commands: dict[str, Command] = {}

    def fork(self, app_type: str | None = None) -> "AppContext":
        """
        Контекст одного запроса.

        Параметры платформы копируются, чтобы user_id и app_id текущего
        запроса не попадали в параллельные запросы. Логгер, хранилище и
        команды общие.
        """
        config = self.config.model_copy(update={"platform": self.config.platform.model_copy(deep=True)})
        context = AppContext(config, self.logger, self.storage, app_type or self.app_type)
        context.commands = self.commands
        return context

    @property
    def params(self) -> PlatformParams:
        """Параметры платформ и тексты навыка."""
        return self.config.platform

    @property
    def is_save_db(self) -> bool:
        return self.config.is_save_db

    def token(self, name: str) -> str | None:
        """Возвращает значение токена платформы в открытом виде."""
        value = getattr(self.config.platform, name, None)
        if value is None:
            return None
        if hasattr(value, "get_secret_value"):
            return value.get_secret_value() or None
        return str(value) or None

    def add_command(
        self,
        name: str,
        slots: list[str],
        cb: Callable[[str, Any], Any] | None = None,
        is_pattern: bool = False
    ) -> None:
        """
        Регистрирует команду.

        Parameters
        ----------
        name : str
            Имя команды. Если cb не указан, имя передаётся в action() как интент.
        slots : list[str]
            Слова-триггеры или регулярные выражения.
        cb : callable, optional
            cb(user_command, controller). Возвращённая строка становится ответом.
        is_pattern : bool, optional
            Слоты являются регулярными выражениями.
        """
        if is_pattern:
            dangerous = [slot for slot in slots if any(p.search(slot) for p in DANGEROUS_PATTERNS)]
            if dangerous:
                self.log_warn(
                    "Найдены небезопасные регулярные выражения, проверьте их корректность: "
                    + ", ".join(dangerous)
                )
        self.commands[name] = Command(slots=tuple(slots), is_pattern=is_pattern, cb=cb)

    def remove_command(self, name: str) -> None:
        self.commands.pop(name, None)

    def clear_commands(self) -> None:
        self.commands.clear()

    def log_error(self, message: str) -> None:
        self.logger.error(message)

    def log_warn(self, message: str) -> None:
        self.logger.warning(message)

    def close(self) -> None:
        """Закрывает соединение с хранилищем."""
        if self.storage is not None:
            self.storage.close()
