"""HTTP запросы к API платформ поверх requests.Session."""
import logging
import os
from typing import Any

import requests
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from umbot.protocols import LoggerProtocol

retry_logger = logging.getLogger("umbot.retries")


class Request:
    """
    Обёртка над requests.Session с единым форматом результата.

    Сбои установки соединения (включая ConnectTimeout) повторяются через tenacity.
    ReadTimeout не повторяется: сервер уже мог принять запрос.
    HTTP ошибки и ошибки платформ не повторяются: запрос с побочным эффектом
    (отправка сообщения) не должен дублироваться.
    """

    HEADER_AP_JSON = {"Content-Type": "application/json"}
    HEADER_FORM_URLENCODED = {"Content-Type": "application/x-www-form-urlencoded"}

    def __init__(
        self,
        logger: LoggerProtocol,
        timeout: float = 5.5,
        max_retries: int = 2,
        session: requests.Session | None = None
    ) -> None:
        self.logger = logger
        self.timeout = timeout
        self.max_retries = max_retries
        self.session = session or requests.Session()

    def _retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
            retry=retry_if_exception_type(requests.exceptions.ConnectionError),
            before_sleep=before_sleep_log(retry_logger, logging.WARNING),
            reraise=True,
        )

    def send(
        self,
        url: str | None,
        method: str | None = None,
        params: dict[str, Any] | None = None,
        json: Any = None,
        data: dict[str, Any] | str | None = None,
        headers: dict[str, str] | None = None,
        attach: str | bytes | None = None,
        attach_name: str = "file",
        is_convert_json: bool = True
    ) -> dict[str, Any]:
        """
        Выполняет запрос.

        Parameters
        ----------
        url : str
            Адрес запроса.
        method : str, optional
            HTTP метод. По умолчанию POST, если есть тело или файл, иначе GET.
        params : dict, optional
            GET параметры.
        json : Any, optional
            Тело запроса в формате JSON.
        data : dict | str, optional
            Тело формы (urlencoded или поля multipart при наличии файла).
        headers : dict, optional
            Дополнительные заголовки.
        attach : str | bytes, optional
            Путь к файлу или содержимое файла для multipart загрузки.
        attach_name : str, optional
            Имя поля файла (по умолчанию 'file').
        is_convert_json : bool, optional
            Разбирать ответ как JSON. Иначе возвращаются байты ответа.

        Returns
        -------
        dict
            {"status": True, "data": Any} или {"status": False, "err": str}
        """
        if not url:
            return {"status": False, "err": "Не указан url!"}

        if attach is not None and not isinstance(attach, bytes) and not os.path.isfile(attach):
            return {"status": False, "err": f"Не удалось найти файл: {attach}"}

        if method is None:
            method = "POST" if (json is not None or data is not None or attach is not None) else "GET"

        def attempt() -> requests.Response:
            kwargs = {"params": params, "json": json, "data": data, "headers": headers, "timeout": self.timeout}
            if isinstance(attach, bytes):
                return self.session.request(method, url, files={attach_name: ("file", attach)}, **kwargs)
            if attach is None:
                return self.session.request(method, url, files=None, **kwargs)
            # файл открывается заново на каждую попытку
            with open(attach, "rb") as handle:
                return self.session.request(
                    method, url, files={attach_name: (os.path.basename(attach), handle)}, **kwargs
                )

        try:
            response = self._retrying()(attempt)
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Ошибка запроса к {url}: {e}")
            return {"status": False, "err": str(e)}

        if not response.ok:
            return {
                "status": False,
                "err": f"Не удалось получить данные с {url} (HTTP {response.status_code}): {response.text[:300]}",
            }

        if not is_convert_json:
            return {"status": True, "data": response.content}
        try:
            return {"status": True, "data": response.json()}
        except ValueError as e:
            return {"status": False, "err": f"Некорректный JSON в ответе {url}: {e}"}
