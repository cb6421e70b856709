"""Базовая модель данных поверх хранилища."""
from abc import ABC, abstractmethod
from typing import Any

from umbot.core.app_context import AppContext
from umbot.models.db.query_data import QueryData


class Model(ABC):
    """
    Базовый класс модели.

    Поля модели описываются в attribute_labels(). Первичным ключом
    считается поле с подписью 'ID'. Запросы выполняются через хранилище
    из AppContext (FileStorage или MongoStorage).
    """

    TABLE_NAME = ""

    def __init__(self, app_context: AppContext) -> None:
        if app_context.storage is None:
            raise ValueError("В AppContext не передано хранилище данных")
        self.app_context = app_context
        self.storage = app_context.storage
        self.query_data = QueryData()
        self.primary_key = self._get_id()
        for name in self.attribute_labels():
            setattr(self, name, None)

    @abstractmethod
    def rules(self) -> list[dict[str, Any]]:
        """Правила валидации: [{"name": [поля], "type": "string", "max": 250}]."""

    @abstractmethod
    def attribute_labels(self) -> dict[str, str]:
        """Поля модели и их подписи."""

    def table_name(self) -> str:
        return self.TABLE_NAME

    def _get_id(self) -> str | None:
        for name, label in self.attribute_labels().items():
            if label.lower() == "id":
                return name
        return None

    def validate(self) -> None:
        """Подготовка значений перед записью."""

    def init(self, data: dict[str, Any] | None) -> None:
        """Заполняет поля модели из записи хранилища."""
        if data is None:
            return
        for name in self.attribute_labels():
            setattr(self, name, data.get(name, ""))

    def _id_query(self) -> dict[str, Any]:
        return {self.primary_key: getattr(self, self.primary_key)}

    def _init_data(self) -> None:
        self.validate()
        self.query_data.query = self._id_query()
        self.query_data.data = {
            name: getattr(self, name)
            for name in self.attribute_labels()
            if name != self.primary_key
        }

    def select_one(self) -> dict[str, Any]:
        self.query_data.query = self._id_query()
        self.query_data.data = None
        return self.storage.select(self.table_name(), self.query_data.query, True, self.rules())

    def save(self, is_new: bool = False) -> bool | None:
        """Добавляет (is_new=True) или обновляет запись."""
        self._init_data()
        return self.storage.save(
            self.table_name(),
            self.query_data.query,
            self.query_data.data,
            self.primary_key,
            is_new,
            self.rules(),
        )

    def update(self) -> bool | None:
        self._init_data()
        return self.storage.update(
            self.table_name(),
            self.query_data.query,
            self.query_data.data,
            self.primary_key,
            self.rules(),
        )

    def add(self) -> bool | None:
        self.validate()
        self.query_data.query = None
        self.query_data.data = {name: getattr(self, name) for name in self.attribute_labels()}
        return self.storage.insert(self.table_name(), self.query_data.data, self.primary_key, self.rules())

    def remove(self) -> bool:
        self.validate()
        self.query_data.query = self._id_query()
        self.query_data.data = None
        return self.storage.remove(self.table_name(), self.query_data.query, self.primary_key)

    def where(self, where: str | dict[str, Any] | None = None, is_one: bool = False) -> dict[str, Any]:
        """
        Выборка по условию.

        Parameters
        ----------
        where : str | dict | None
            Словарь условий или строка вида `userId`="1" `type`=0.
        is_one : bool, optional
            Вернуть только первую запись.
        """
        select = QueryData.parse(where) if isinstance(where, str) else where
        return self.storage.select(self.table_name(), select, is_one, self.rules())

    def where_one(self, where: str | dict[str, Any] | None = None) -> bool:
        """Находит одну запись и заполняет ею модель."""
        result = self.where(where, True)
        if result and result.get("status"):
            self.init(result["data"])
            return True
        return False

    def is_connected(self) -> bool:
        return self.storage.is_connected()
