"""Протокол хранилища моделей."""
from typing import Protocol, runtime_checkable, Any


@runtime_checkable
class StorageProtocol(Protocol):
    """
    Протокол хранилища данных для моделей.

    Хранилище является явным объектом, которым владеет слой моделей. Один экземпляр
    создаётся на приложение и передаётся в модели через AppContext.

    Примеры реализаций:
        - FileStorage (по json файлу на таблицу)
        - MongoStorage (по коллекции MongoDB на таблицу)

    Notes
    -----
    Все методы возвращают результат, а не выбрасывают исключения:
    ошибки логируются, вызывающий код получает False/None или
    {"status": False, "error": str}.
    """

    def select(
        self,
        table: str,
        where: dict[str, Any] | None,
        is_one: bool = False,
        rules: list[dict[str, Any]] | None = None
    ) -> dict[str, Any]:
        """
        Выбирает записи таблицы.

        Parameters
        ----------
        table : str
            Имя таблицы (коллекции, файла).
        where : dict | None
            Условия равенства полей. None: без условий.
        is_one : bool, optional
            Вернуть только первую найденную запись.

        Returns
        -------
        dict
            {"status": True, "data": dict | list[dict]} или
            {"status": False, "error": str}
        """
        ...

    def insert(
        self,
        table: str,
        data: dict[str, Any],
        primary_key: str,
        rules: list[dict[str, Any]] | None = None
    ) -> bool | None:
        ...

    def update(
        self,
        table: str,
        query: dict[str, Any],
        data: dict[str, Any],
        primary_key: str,
        rules: list[dict[str, Any]] | None = None
    ) -> bool | None:
        ...

    def save(
        self,
        table: str,
        query: dict[str, Any],
        data: dict[str, Any],
        primary_key: str,
        is_new: bool = False,
        rules: list[dict[str, Any]] | None = None
    ) -> bool | None:
        """Добавляет (is_new=True) или обновляет запись."""
        ...

    def remove(self, table: str, query: dict[str, Any], primary_key: str) -> bool:
        ...

    def is_connected(self) -> bool:
        ...

    def close(self) -> None:
        ...
