"""Клиент Telegram Bot API."""
import json
from typing import Any

from umbot.api.request import Request
from umbot.core.app_context import AppContext
from umbot.utils.files import is_file


class TelegramRequest:
    """
    Отправка сообщений, опросов и медиа через Telegram Bot API.

    Все методы возвращают ответ API ({"ok": True, "result": ...}) или None
    при ошибке. Ошибки пишутся в лог приложения.
    """

    API_ENDPOINT = "https://api.telegram.org/bot"

    def __init__(self, app_context: AppContext, request: Request | None = None) -> None:
        self.app_context = app_context
        self.request = request or Request(
            app_context.logger,
            timeout=app_context.config.http.timeout,
            max_retries=app_context.config.http.max_retries,
        )
        self.token = app_context.token("telegram_token")
        self.error: str | None = None

    def init_token(self, token: str | None) -> None:
        self.token = token

    def _get_url(self, method: str) -> str:
        return f"{self.API_ENDPOINT}{self.token}/{method}"

    def call(
        self,
        method: str,
        post: dict[str, Any],
        file_field: str | None = None,
        file: str | bytes | None = None
    ) -> dict[str, Any] | None:
        """
        Вызывает метод Bot API.

        Parameters
        ----------
        method : str
            Имя метода (sendMessage, sendPhoto, ...).
        post : dict
            Параметры метода.
        file_field : str, optional
            Имя поля для загружаемого файла.
        file : str | bytes, optional
            Путь к файлу или его содержимое.
        """
        if not self.token:
            self._log(method, "Не указан telegram токен!")
            return None

        if file is not None:
            # multipart: вложенные структуры передаются строкой JSON
            form = {
                key: json.dumps(value, ensure_ascii=False) if isinstance(value, (dict, list)) else value
                for key, value in post.items()
            }
            result = self.request.send(self._get_url(method), data=form, attach=file, attach_name=file_field or "document")
        else:
            result = self.request.send(self._get_url(method), json=post)

        if not result["status"]:
            self._log(method, result["err"])
            return None
        data = result["data"]
        if not data.get("ok"):
            self.error = data.get("description")
            self._log(method, self.error)
            return None
        return data

    def _send_file(
        self,
        method: str,
        field: str,
        chat_id: str | int,
        file: str | bytes,
        params: dict[str, Any] | None = None
    ) -> dict[str, Any] | None:
        post = {**(params or {}), "chat_id": chat_id}
        if isinstance(file, bytes) or is_file(file):
            return self.call(method, post, file_field=field, file=file)
        post[field] = file
        return self.call(method, post)

    def send_message(self, chat_id: str | int, message: str, params: dict[str, Any] | None = None) -> dict[str, Any] | None:
        post = {**(params or {}), "chat_id": chat_id, "text": message}
        return self.call("sendMessage", post)

    def send_poll(
        self,
        chat_id: str | int,
        question: str,
        options: list[str],
        params: dict[str, Any] | None = None
    ) -> dict[str, Any] | None:
        """Отправляет опрос. Telegram принимает от 2 до 10 вариантов ответа."""
        if not options or len(options) < 2:
            self._log("sendPoll", "Недостаточное количество вариантов. Должно быть от 2 - 10 вариантов!")
            return None
        post = {**(params or {}), "chat_id": chat_id, "question": question, "options": options[:10]}
        return self.call("sendPoll", post)

    def send_photo(
        self,
        chat_id: str | int,
        file: str | bytes,
        desc: str | None = None,
        params: dict[str, Any] | None = None
    ) -> dict[str, Any] | None:
        params = dict(params or {})
        if desc:
            params["caption"] = desc
        return self._send_file("sendPhoto", "photo", chat_id, file, params)

    def send_document(self, chat_id: str | int, file: str | bytes, params: dict[str, Any] | None = None) -> dict[str, Any] | None:
        return self._send_file("sendDocument", "document", chat_id, file, params)

    def send_audio(self, chat_id: str | int, file: str | bytes, params: dict[str, Any] | None = None) -> dict[str, Any] | None:
        return self._send_file("sendAudio", "audio", chat_id, file, params)

    def send_video(self, chat_id: str | int, file: str | bytes, params: dict[str, Any] | None = None) -> dict[str, Any] | None:
        return self._send_file("sendVideo", "video", chat_id, file, params)

    def send_media_group(self, chat_id: str | int, media: list[dict[str, Any]]) -> dict[str, Any] | None:
        """Отправляет альбом (2-10 фото, уже загруженных или по url)."""
        return self.call("sendMediaGroup", {"chat_id": chat_id, "media": media[:10]})

    def _log(self, method: str, error: str | None = "") -> None:
        self.app_context.log_error(
            f"TelegramApi: Произошла ошибка при отправке запроса {method}\nОшибка: {error}"
        )
