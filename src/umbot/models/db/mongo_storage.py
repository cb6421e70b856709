"""Хранилище моделей в MongoDB: по коллекции на таблицу."""
from typing import Any
from urllib.parse import quote_plus

from pymongo import ASCENDING, IndexModel, MongoClient
from pymongo.errors import OperationFailure, PyMongoError

from umbot.config.models import DatabaseConfig
from umbot.protocols import LoggerProtocol
from umbot.utils.text import resize

NOT_FOUND_ERROR = "Не удалось получить данные"
DEFAULT_DATABASE = "umbot"
STRING_TYPES = ("string", "text")
NUMBER_TYPES = ("int", "integer", "bool")


def build_uri(config: DatabaseConfig) -> str:
    """Строит строку подключения из host/user/password."""
    host = config.host or "localhost:27017"
    if host.startswith("mongodb://") or host.startswith("mongodb+srv://"):
        return host
    if config.user:
        password = config.password.get_secret_value() if config.password else ""
        return f"mongodb://{quote_plus(config.user)}:{quote_plus(password)}@{host}"
    return f"mongodb://{host}"


class MongoStorage:
    """
    Хранилище моделей в MongoDB.

    Один клиент pymongo на приложение. Клиент создаётся один раз и
    передаётся моделям через AppContext, поэтому все запросы используют
    общий пул соединений драйвера.
    """

    def __init__(
        self,
        config: DatabaseConfig,
        logger: LoggerProtocol,
        client: MongoClient | None = None
    ) -> None:
        self.config = config
        self.logger = logger
        self._client = client or MongoClient(
            build_uri(config),
            serverSelectionTimeoutMS=7000,
            connectTimeoutMS=7000,
            socketTimeoutMS=7000,
            **config.options,
        )
        self._db = self._client[config.database or DEFAULT_DATABASE]
        self._indexed: set[str] = set()

    def _collection(self, table: str, primary_key: str | None = None):
        collection = self._db[table]
        if primary_key and table not in self._indexed:
            self._indexed.add(table)
            try:
                collection.create_indexes(
                    [IndexModel([(primary_key, ASCENDING)], name=f"ux_{table}_{primary_key}", unique=True)]
                )
            except OperationFailure as e:
                self.logger.warning(f"Не удалось создать индекс для {table}: {e}")
        return collection

    @staticmethod
    def validate(element: dict[str, Any] | None, rules: list[dict[str, Any]] | None) -> dict[str, Any]:
        """
        Приводит значения к типам из правил модели.

        Строки обрезаются до max, числовые поля приводятся к int.
        """
        if not element:
            return {}
        element = dict(element)
        for rule in rules or []:
            for name in rule.get("name", []):
                if name not in element or element[name] is None:
                    continue
                if rule.get("type") in STRING_TYPES:
                    value = str(element[name])
                    if rule.get("max") is not None:
                        value = resize(value, rule["max"])
                    element[name] = value
                elif rule.get("type") in NUMBER_TYPES:
                    try:
                        element[name] = int(element[name])
                    except (TypeError, ValueError):
                        element[name] = 0
        return element

    def select(
        self,
        table: str,
        where: dict[str, Any] | None,
        is_one: bool = False,
        rules: list[dict[str, Any]] | None = None
    ) -> dict[str, Any]:
        query = self.validate(where, rules)
        try:
            collection = self._collection(table)
            if is_one:
                result = collection.find_one(query, {"_id": False})
            else:
                result = list(collection.find(query, {"_id": False}))
        except PyMongoError as e:
            self.logger.error(f"MongoStorage.select({table}): {e}")
            return {"status": False, "error": str(e)}
        if result:
            return {"status": True, "data": result}
        return {"status": False, "error": NOT_FOUND_ERROR}

    def insert(
        self,
        table: str,
        data: dict[str, Any],
        primary_key: str,
        rules: list[dict[str, Any]] | None = None
    ) -> bool | None:
        document = self.validate(data, rules)
        try:
            self._collection(table, primary_key).insert_one(document)
        except PyMongoError as e:
            self.logger.error(f"MongoStorage.insert({table}): {e}")
            return False
        return True

    def update(
        self,
        table: str,
        query: dict[str, Any],
        data: dict[str, Any],
        primary_key: str,
        rules: list[dict[str, Any]] | None = None
    ) -> bool | None:
        if primary_key not in (query or {}):
            return None
        try:
            self._collection(table, primary_key).update_one(
                self.validate(query, rules),
                {"$set": self.validate(data, rules)},
            )
        except PyMongoError as e:
            self.logger.error(f"MongoStorage.update({table}): {e}")
            return False
        return True

    def save(
        self,
        table: str,
        query: dict[str, Any],
        data: dict[str, Any],
        primary_key: str,
        is_new: bool = False,
        rules: list[dict[str, Any]] | None = None
    ) -> bool | None:
        if is_new or not self.select(table, query, True, rules)["status"]:
            return self.insert(table, {**data, **query}, primary_key, rules)
        return self.update(table, query, data, primary_key, rules)

    def remove(self, table: str, query: dict[str, Any], primary_key: str) -> bool:
        if primary_key not in (query or {}):
            return False
        try:
            self._collection(table).delete_one(query)
        except PyMongoError as e:
            self.logger.error(f"MongoStorage.remove({table}): {e}")
            return False
        return True

    def is_connected(self) -> bool:
        try:
            self._client.admin.command("ping")
            return True
        except PyMongoError as e:
            self.logger.error(f"Нет соединения с MongoDB: {e}")
            return False

    def close(self) -> None:
        self._client.close()
