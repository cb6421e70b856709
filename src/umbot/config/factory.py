"""Фабрика для создания компонентов из конфигурации."""
from logging import Logger

from fastapi import FastAPI

from umbot.config.models import AppConfig
from umbot.controller import BaseBotController
from umbot.core.app_context import AppContext
from umbot.core.bot import Bot, ControllerFactory
from umbot.models.db import FileStorage, MongoStorage
from umbot.protocols import StorageProtocol
from umbot.utils import get_logger


class ComponentFactory:
    """
    Фабрика компонентов: логгер, хранилище, контекст и бот из конфигурации.
    """

    def __init__(self, config: AppConfig) -> None:
        self.config = config
        self._logger: Logger | None = None
        self._storage: StorageProtocol | None = None

    def get_logger(self) -> Logger:
        """Создаёт или возвращает кэшированный логгер."""
        if self._logger is None:
            logger_config = {
                "log_dir": self.config.logging.log_dir,
                "level": self.config.logging.level,
                "max_log_days": self.config.logging.max_log_days
            }
            self._logger = get_logger(logger_config, "umbot")
        return self._logger

    def get_storage(self) -> StorageProtocol:
        """Создаёт хранилище: MongoDB при is_save_db, иначе json файлы."""
        if self._storage is None:
            logger = self.get_logger()
            if self.config.is_save_db:
                self._storage = MongoStorage(self.config.db, logger)
            else:
                self._storage = FileStorage(self.config.json_dir, logger)
        return self._storage

    def get_app_context(self, platform_type: str | None = None) -> AppContext:
        return AppContext(
            config=self.config,
            logger=self.get_logger(),
            storage=self.get_storage(),
            app_type=platform_type
        )

    def get_bot(
        self,
        controller_factory: ControllerFactory = BaseBotController,
        platform_type: str | None = None
    ) -> Bot:
        """Создаёт бота с контроллером (по умолчанию BaseBotController)."""
        return Bot(self.get_app_context(platform_type), controller_factory)

    def get_server_app(
        self,
        controller_factory: ControllerFactory = BaseBotController,
        platform_type: str | None = None
    ) -> FastAPI:
        """FastAPI приложение вебхука для запуска через uvicorn."""
        return self.get_bot(controller_factory, platform_type).create_app()
