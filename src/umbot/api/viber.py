"""Клиент Viber REST API."""
import json
from typing import Any

from umbot.api.request import Request
from umbot.core.app_context import AppContext
from umbot.utils.text import is_say_text, resize


class ViberRequest:
    """Отправка сообщений, rich media и файлов через Viber REST API."""

    API_ENDPOINT = "https://chatapi.viber.com/pa/"

    def __init__(self, app_context: AppContext, request: Request | None = None) -> None:
        self.app_context = app_context
        self.request = request or Request(
            app_context.logger,
            timeout=app_context.config.http.timeout,
            max_retries=app_context.config.http.max_retries,
        )
        self.token = app_context.token("viber_token")
        self.error: str | None = None

    def init_token(self, token: str | None) -> None:
        self.token = token

    def call(self, method: str, post: dict[str, Any]) -> dict[str, Any] | None:
        """
        Вызывает метод Viber API.

        Returns
        -------
        dict | None
            Ответ API при status == 0, иначе None.
        """
        if not self.token:
            self._log(method, "Не указан viber токен!")
            return None
        body = dict(post)
        body["min_api_version"] = self.app_context.params.viber_api_version or 2
        result = self.request.send(
            self.API_ENDPOINT + method,
            json=body,
            headers={"X-Viber-Auth-Token": self.token},
        )
        if not result["status"]:
            self._log(method, result["err"])
            return None
        data = result["data"]
        if data.get("failed_list"):
            self.error = json.dumps(data["failed_list"], ensure_ascii=False)
            self._log(method, data.get("status_message"))
        if data.get("status") == 0:
            return data
        status_message = data.get("status_message", "ok")
        if status_message != "ok":
            self.error = status_message
            self._log(method, status_message)
        return None

    def get_user_details(self, user_id: str) -> dict[str, Any] | None:
        return self.call("get_user_details", {"id": user_id})

    def send_message(
        self,
        receiver: str,
        sender: dict[str, Any] | str | None,
        text: str,
        params: dict[str, Any] | None = None
    ) -> dict[str, Any] | None:
        """
        Отправляет текстовое сообщение.

        Parameters
        ----------
        sender : dict | str
            {"name": ..., "avatar": ...} или только имя отправителя.
        params : dict, optional
            keyboard и прочие параметры send_message.
        """
        if not isinstance(sender, dict):
            sender = {"name": sender or ""}
        post = {"receiver": receiver, "sender": sender, "text": text, "type": "text"}
        post.update(params or {})
        return self.call("send_message", post)

    def set_webhook(self, url: str, params: dict[str, Any] | None = None) -> dict[str, Any] | None:
        """Устанавливает вебхук. Пустой url снимает его."""
        if url:
            post: dict[str, Any] = {
                "url": url,
                "event_types": [
                    "delivered",
                    "seen",
                    "failed",
                    "subscribed",
                    "unsubscribed",
                    "conversation_started",
                ],
                "send_name": True,
                "send_photo": True,
            }
        else:
            post = {"url": ""}
        post.update(params or {})
        return self.call("set_webhook", post)

    def rich_media(
        self,
        receiver: str,
        rich_media: list[dict[str, Any]],
        params: dict[str, Any] | None = None
    ) -> dict[str, Any] | None:
        """Отправляет карусель. ButtonsGroupRows равен числу элементов."""
        post = {
            "receiver": receiver,
            "type": "rich_media",
            "rich_media": {
                "Type": "rich_media",
                "ButtonsGroupColumns": 6,
                "ButtonsGroupRows": len(rich_media),
                "BgColor": "#FFFFFF",
                "Buttons": rich_media,
            },
        }
        post.update(params or {})
        return self.call("send_message", post)

    def send_file(self, receiver: str, file: str, params: dict[str, Any] | None = None) -> dict[str, Any] | None:
        """Отправляет файл по url. Локальные файлы Viber не принимает."""
        if not is_say_text(["http://", "https://"], file):
            return None
        post = {
            "receiver": receiver,
            "type": "file",
            "media": file,
            "size": 10e4,
            "file_name": resize(file, 150),
        }
        post.update(params or {})
        return self.call("send_message", post)

    def _log(self, method: str, error: str | None = "") -> None:
        self.app_context.log_error(
            f"ViberApi: Произошла ошибка при отправке запроса {method}\nОшибка: {error}\n{self.error or ''}"
        )
