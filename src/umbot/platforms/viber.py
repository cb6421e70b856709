"""Адаптер Viber бота."""
from typing import TYPE_CHECKING, Any

from umbot.api.viber import ViberRequest
from umbot.components.button.buttons import T_VIBER_BUTTONS
from umbot.core.app_context import AppContext
from umbot.platforms.base import BasePlatform

if TYPE_CHECKING:
    from umbot.controller import BotController


class Viber(BasePlatform):
    """Viber бот. Ответ отправляется через send_message и rich_media."""

    def __init__(self, app_context: AppContext, client: ViberRequest | None = None) -> None:
        super().__init__(app_context)
        self.client = client or ViberRequest(app_context)

    def _set_nlu(self, user_name: str) -> None:
        name = user_name.split(" ")
        self.controller.nlu.set_nlu({
            "thisUser": {
                "username": name[0] or None,
                "first_name": name[1] if len(name) > 1 else None,
                "last_name": name[2] if len(name) > 2 else None,
            }
        })

    def init(self, query: str | dict[str, Any] | None, controller: "BotController") -> bool:
        content = self._parse_query(query)
        if not content:
            self.error = "Viber.init(): Отправлен пустой запрос!"
            return False
        self.controller = controller
        controller.request_object = content
        params = self.app_context.params

        event = content.get("event")
        if event == "conversation_started":
            user = content.get("user")
            if user:
                controller.user_id = user.get("id")
                params.user_id = controller.user_id
                controller.user_command = ""
                controller.original_user_command = ""
                controller.message_id = 0
                params.viber_api_version = user.get("api_version") or 2
                self._set_nlu(user.get("name") or "")
            return True
        if event == "message" and content.get("message"):
            sender = content.get("sender") or {}
            text = content["message"].get("text") or ""
            controller.user_id = sender.get("id")
            params.user_id = controller.user_id
            controller.user_command = text.lower().strip()
            controller.original_user_command = text
            controller.message_id = content.get("message_token")
            params.viber_api_version = sender.get("api_version") or 2
            self._set_nlu(sender.get("name") or "")
            return True

        self.error = f"Viber.init(): Событие {event} не обрабатывается!"
        return False

    def get_context(self) -> dict[str, Any] | None:
        """
        Returns
        -------
        dict | None
            {"receiver", "text", "params", "rich_media"} или None, если
            отправка отключена.
        """
        controller = self.controller
        if not controller.is_send:
            return None
        params: dict[str, Any] = {}
        keyboard = controller.buttons.get_buttons(T_VIBER_BUTTONS)
        if keyboard:
            params["keyboard"] = {**keyboard, "Type": "keyboard"}
        rich_media: list[dict[str, Any]] = []
        if controller.card.images:
            cards = controller.card.get_cards(user_id=controller.user_id)
            if isinstance(cards, dict):
                rich_media = [cards]
            elif cards:
                rich_media = list(cards)
        if controller.sound.sounds:
            controller.sound.get_sounds(controller.tts or controller.text, user_id=controller.user_id)
        return {
            "receiver": controller.user_id,
            "text": controller.text,
            "params": params,
            "rich_media": rich_media,
        }

    def deliver(self, context: dict[str, Any] | None) -> str:
        if context:
            sender = self.app_context.params.viber_sender
            self.client.send_message(context["receiver"], sender, context["text"], context["params"])
            if context["rich_media"]:
                self.client.rich_media(context["receiver"], context["rich_media"])
        return "ok"
