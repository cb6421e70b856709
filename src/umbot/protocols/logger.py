"""Протокол логгера."""
from typing import Protocol, runtime_checkable, Any


@runtime_checkable
class LoggerProtocol(Protocol):
    """
    Минимальный интерфейс логгера, которым пользуются компоненты.

    Ему соответствует logging.Logger и любые совместимые обёртки.
    """

    def debug(self, msg: Any, *args: Any, **kwargs: Any) -> None: ...

    def info(self, msg: Any, *args: Any, **kwargs: Any) -> None: ...

    def warning(self, msg: Any, *args: Any, **kwargs: Any) -> None: ...

    def error(self, msg: Any, *args: Any, **kwargs: Any) -> None: ...

    def exception(self, msg: Any, *args: Any, **kwargs: Any) -> None: ...
