"""Адаптер сообщества VK (Callback API)."""
from typing import TYPE_CHECKING, Any

from umbot.api.vk import VkRequest
from umbot.components.button.buttons import T_VK_BUTTONS
from umbot.core.app_context import AppContext
from umbot.platforms.base import BasePlatform

if TYPE_CHECKING:
    from umbot.controller import BotController


class Vk(BasePlatform):
    """
    Бот сообщества VK.

    Ответ отправляется методом messages.send, на вебхук возвращается 'ok'.
    """

    def __init__(self, app_context: AppContext, client: VkRequest | None = None) -> None:
        super().__init__(app_context)
        self.client = client or VkRequest(app_context)

    def init(self, query: str | dict[str, Any] | None, controller: "BotController") -> bool:
        content = self._parse_query(query)
        if not content:
            self.error = "Vk.init(): Отправлен пустой запрос!"
            return False
        self.controller = controller
        controller.request_object = content

        event_type = content.get("type")
        if event_type == "confirmation":
            token = self.app_context.params.vk_confirmation_token
            if not token:
                self.error = "Vk.init(): Не указан код подтверждения сервера!"
                return False
            self.send_in_init = token
            return True
        if event_type == "message_new":
            obj = content.get("object")
            if not obj:
                self.error = "Vk.init(): Не передан объект сообщения!"
                return False
            # Callback API до 5.103 присылает сообщение без обёртки message
            message = obj.get("message", obj)
            text = message.get("text") or ""
            controller.user_id = message.get("from_id")
            self.app_context.params.user_id = controller.user_id
            controller.user_command = text.lower().strip()
            controller.original_user_command = text.strip()
            controller.message_id = message.get("id")
            controller.payload = message.get("payload")

            users = self.client.users_get(controller.user_id)
            if users:
                user = users[0] if isinstance(users, list) else users
                controller.nlu.set_nlu({
                    "thisUser": {
                        "username": None,
                        "first_name": user.get("first_name"),
                        "last_name": user.get("last_name"),
                    }
                })
            return True

        self.error = "Vk.init(): Некорректный тип данных!"
        return False

    def get_context(self) -> dict[str, Any] | None:
        """
        Собирает параметры messages.send.

        Returns
        -------
        dict | None
            {"peer_id", "message", "params"} или None, если отправка отключена.
        """
        controller = self.controller
        if not controller.is_send:
            return None
        params: dict[str, Any] = {}
        keyboard = controller.buttons.get_buttons_json(T_VK_BUTTONS)
        if keyboard:
            params["keyboard"] = keyboard
        if controller.card.images or controller.card.template:
            attach = controller.card.get_cards(user_id=controller.user_id)
            if isinstance(attach, dict) and attach.get("type"):
                params["template"] = attach
            elif attach:
                params["attachments"] = list(attach)
        if controller.sound.sounds:
            attach = controller.sound.get_sounds(controller.tts or controller.text, user_id=controller.user_id)
            if isinstance(attach, list) and attach:
                params["attachments"] = attach + params.get("attachments", [])
        return {"peer_id": controller.user_id, "message": controller.text, "params": params}

    def deliver(self, context: dict[str, Any] | None) -> str:
        if context:
            self.client.messages_send(context["peer_id"], context["message"], context["params"])
        return "ok"
