"""Клиент VK API (сообщения сообщества, загрузка фото и документов)."""
import json
import time
from typing import Any

from umbot.api.request import Request
from umbot.core.app_context import AppContext


class VkRequest:
    """
    Вызов методов VK API.

    Методы возвращают поле response ответа VK или None при ошибке.
    """

    VK_API_VERSION = "5.103"
    VK_API_ENDPOINT = "https://api.vk.ru/method/"
    TOKEN_NAME = "vk_token"
    LOG_NAME = "VkApi"

    def __init__(self, app_context: AppContext, request: Request | None = None) -> None:
        self.app_context = app_context
        self.request = request or Request(
            app_context.logger,
            timeout=app_context.config.http.timeout,
            max_retries=app_context.config.http.max_retries,
        )
        self.vk_api_version = app_context.params.vk_api_version or self.VK_API_VERSION
        self.token = app_context.token(self.TOKEN_NAME)
        self.error: str | None = None

    def init_token(self, token: str | None) -> None:
        self.token = token

    def call(self, method: str, post: dict[str, Any] | None = None) -> Any:
        """
        Вызывает метод VK API.

        Parameters
        ----------
        method : str
            Имя метода ('messages.send', 'users.get', ...).
        post : dict, optional
            Параметры метода. access_token и v добавляются автоматически.
        """
        if not self.token:
            self._log(method, "Не указан vk токен!")
            return None
        form = dict(post or {})
        form["access_token"] = self.token
        form["v"] = self.vk_api_version

        result = self.request.send(
            self.VK_API_ENDPOINT + method,
            data=form,
            headers=Request.HEADER_FORM_URLENCODED,
        )
        if not result["status"]:
            self._log(method, result["err"])
            return None
        data = result["data"]
        if isinstance(data, dict) and "error" in data:
            self.error = json.dumps(data["error"], ensure_ascii=False)
            self._log(method, self.error)
            return None
        if isinstance(data, dict) and "response" in data:
            return data["response"]
        return data

    def upload(self, url: str, file: str | bytes) -> dict[str, Any] | None:
        """Загружает файл на сервер, полученный из *.get*UploadServer."""
        result = self.request.send(url, attach=file, attach_name="file")
        if not result["status"]:
            self._log("upload", result["err"])
            return None
        data = result["data"]
        if "error" in data:
            self.error = json.dumps(data["error"], ensure_ascii=False)
            self._log("upload", self.error)
            return None
        return data

    def messages_send(self, peer_id: int | str, message: str, params: dict[str, Any] | None = None) -> Any:
        """
        Отправляет сообщение пользователю.

        Parameters
        ----------
        peer_id : int | str
            Идентификатор получателя. Строка трактуется как короткое имя (domain).
        message : str
            Текст сообщения.
        params : dict, optional
            keyboard, template, attachments, random_id и прочие параметры messages.send.
            При наличии клавиатуры шаблон (карусель) не отправляется.
        """
        post: dict[str, Any] = {"message": message}
        if isinstance(peer_id, int):
            post["peer_id"] = peer_id
        else:
            post["domain"] = peer_id

        params = dict(params or {})
        post["random_id"] = params.pop("random_id", None) or int(time.time() * 1000)
        attachments = params.pop("attachments", None)
        if attachments:
            post["attachment"] = ",".join(attachments)
        template = params.pop("template", None)
        if template is not None:
            post["template"] = template if isinstance(template, str) else json.dumps(template, ensure_ascii=False)
        keyboard = params.pop("keyboard", None)
        if keyboard is not None:
            post.pop("template", None)
            post["keyboard"] = keyboard if isinstance(keyboard, str) else json.dumps(keyboard, ensure_ascii=False)
        post = {**params, **post}
        return self.call("messages.send", post)

    def users_get(self, user_id: int | str | list[str], params: dict[str, Any] | None = None) -> Any:
        if isinstance(user_id, int):
            post: dict[str, Any] = {"user_id": user_id}
        elif isinstance(user_id, list):
            post = {"user_ids": ",".join(str(uid) for uid in user_id)}
        else:
            post = {"user_ids": user_id}
        post.update(params or {})
        return self.call("users.get", post)

    def photos_get_messages_upload_server(self, peer_id: int | str) -> Any:
        return self.call("photos.getMessagesUploadServer", {"peer_id": peer_id})

    def photos_save_messages_photo(self, photo: str, server: str | int, hash_: str) -> Any:
        return self.call("photos.saveMessagesPhoto", {"photo": photo, "server": server, "hash": hash_})

    def docs_get_messages_upload_server(self, peer_id: int | str, type_: str = "doc") -> Any:
        """type_: 'doc' или 'audio_message'."""
        return self.call("docs.getMessagesUploadServer", {"peer_id": peer_id, "type": type_})

    def docs_save(self, file: str, title: str, tags: str | None = None) -> Any:
        post = {"file": file, "title": title}
        if tags:
            post["tags"] = tags
        return self.call("docs.save", post)

    def _log(self, method: str, error: str | None = "") -> None:
        self.app_context.log_error(
            f"{self.LOG_NAME}: Произошла ошибка при отправке запроса {method}\nОшибка: {error}"
        )
