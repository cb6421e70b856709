"""Адаптер Telegram бота."""
from typing import TYPE_CHECKING, Any

from umbot.api.telegram import TelegramRequest
from umbot.components.button.buttons import T_TELEGRAM_BUTTONS
from umbot.core.app_context import AppContext
from umbot.platforms.base import BasePlatform

if TYPE_CHECKING:
    from umbot.controller import BotController


class Telegram(BasePlatform):
    """
    Telegram бот на вебхуке.

    Текст уходит через sendMessage, карточка из нескольких изображений
    превращается в опрос. Сами изображения и звуки отправляются
    форматтерами при сборке ответа.
    """

    def __init__(self, app_context: AppContext, client: TelegramRequest | None = None) -> None:
        super().__init__(app_context)
        self.client = client or TelegramRequest(app_context)

    def _set_user(self, chat: dict[str, Any]) -> None:
        self.controller.nlu.set_nlu({
            "thisUser": {
                "username": chat.get("username"),
                "first_name": chat.get("first_name"),
                "last_name": chat.get("last_name"),
            }
        })

    def init(self, query: str | dict[str, Any] | None, controller: "BotController") -> bool:
        content = self._parse_query(query)
        if not content:
            self.error = "Telegram.init(): Отправлен пустой запрос!"
            return False
        self.controller = controller
        controller.request_object = content

        if "message" in content:
            message = content["message"]
            text = message.get("text") or ""
            chat = message.get("chat") or {}
            controller.user_id = chat.get("id")
            controller.user_command = text.lower().strip()
            controller.original_user_command = text
            controller.message_id = message.get("message_id")
        elif "callback_query" in content:
            callback = content["callback_query"]
            data = callback.get("data") or ""
            message = callback.get("message") or {}
            chat = message.get("chat") or callback.get("from") or {}
            controller.user_id = chat.get("id")
            controller.user_command = data.lower().strip()
            controller.original_user_command = data
            controller.payload = data
            controller.message_id = message.get("message_id")
        else:
            self.error = "Telegram.init(): Неизвестный тип обновления!"
            return False

        self.app_context.params.user_id = controller.user_id
        self._set_user(chat)
        return True

    def get_context(self) -> dict[str, Any] | None:
        """
        Returns
        -------
        dict | None
            {"chat_id", "text", "params", "poll"} или None, если отправка отключена.
        """
        controller = self.controller
        if not controller.is_send:
            return None
        params: dict[str, Any] = {"parse_mode": "markdown"}
        keyboard = controller.buttons.get_buttons(T_TELEGRAM_BUTTONS)
        if keyboard:
            params["reply_markup"] = keyboard
        poll = None
        if controller.card.images:
            poll = controller.card.get_cards(user_id=controller.user_id)
        if controller.sound.sounds:
            controller.sound.get_sounds(controller.tts or controller.text, user_id=controller.user_id)
        return {
            "chat_id": controller.user_id,
            "text": controller.text,
            "params": params,
            "poll": poll,
        }

    def deliver(self, context: dict[str, Any] | None) -> str:
        if context:
            self.client.send_message(context["chat_id"], context["text"], context["params"])
            poll = context.get("poll")
            if poll:
                self.client.send_poll(context["chat_id"], poll["question"], poll["options"])
        return "ok"
