"""Адаптер Маруси."""
from typing import TYPE_CHECKING, Any

from umbot.components.button.buttons import T_ALISA_BUTTONS
from umbot.core.app_context import AppContext
from umbot.platforms.base import BasePlatform
from umbot.utils.text import resize

if TYPE_CHECKING:
    from umbot.controller import BotController


class Marusia(BasePlatform):
    """
    Навык Маруси.

    Протокол повторяет Алису, в ответ дополнительно входит session.
    """

    VERSION = "1.0"
    MAX_TIME_REQUEST = 2800
    MAX_TEXT_LENGTH = 1024
    STATE_NAMES = (
        ("user", "user_state_update"),
        ("session", "session_state"),
    )

    def __init__(self, app_context: AppContext) -> None:
        super().__init__(app_context)
        self._session: dict[str, Any] = {}
        self._state_name: str | None = None

    def _get_response(self) -> dict[str, Any]:
        controller = self.controller
        response: dict[str, Any] = {
            "text": resize(controller.text, self.MAX_TEXT_LENGTH),
            "tts": resize(controller.tts, self.MAX_TEXT_LENGTH),
            "end_session": controller.is_end,
        }
        if controller.is_screen:
            if controller.card.images or controller.card.template:
                card = controller.card.get_cards()
                if card:
                    response["card"] = card
            response["buttons"] = controller.buttons.get_buttons(T_ALISA_BUTTONS)
        return response

    def _get_session(self) -> dict[str, Any]:
        return {
            "session_id": self._session.get("session_id"),
            "message_id": self._session.get("message_id"),
            "user_id": self._session.get("user_id"),
        }

    def _set_state(self, state: dict[str, Any]) -> None:
        for key, state_name in self.STATE_NAMES:
            if key in state:
                self.controller.state = state[key]
                self._state_name = state_name
                return

    def _init_user_command(self, request: dict[str, Any]) -> None:
        controller = self.controller
        payload = request.get("payload")
        if request.get("type") != "SimpleUtterance" and isinstance(payload, str):
            controller.user_command = payload
            controller.original_user_command = payload
        else:
            controller.user_command = (request.get("command") or "").strip()
            controller.original_user_command = (request.get("original_utterance") or "").strip()
        if request.get("type") != "SimpleUtterance":
            controller.payload = payload
        if not controller.user_command:
            controller.user_command = controller.original_user_command

    def init(self, query: str | dict[str, Any] | None, controller: "BotController") -> bool:
        content = self._parse_query(query)
        if not content:
            self.error = "Marusia.init(): Отправлен пустой запрос!"
            return False
        self.controller = controller
        if "session" not in content and "request" not in content:
            if "account_linking_complete_event" in content:
                controller.user_events = {"auth": {"status": True}}
                controller.is_auth_success = True
                return True
            self.error = "Marusia.init(): Не корректные данные!"
            return False

        controller.request_object = content
        request = content.get("request") or {}
        self._init_user_command(request)
        if "state" in content:
            self._set_state(content["state"] or {})

        self._session = content.get("session") or {}
        controller.user_id = self._session.get("user_id")
        self.app_context.params.user_id = controller.user_id
        controller.nlu.set_nlu(request.get("nlu"))
        controller.user_meta = content.get("meta") or {}
        controller.message_id = self._session.get("message_id")

        self.app_context.params.app_id = self._session.get("skill_id")
        controller.is_screen = "screen" in (controller.user_meta.get("interfaces") or {})
        return True

    def get_context(self) -> dict[str, Any]:
        controller = self.controller
        self._init_tts()
        result: dict[str, Any] = {
            "version": self.VERSION,
            "response": self._get_response(),
            "session": self._get_session(),
        }
        if self.is_used_local_storage and controller.user_data and self._state_name:
            result[self._state_name] = controller.user_data
        time_end = self.get_processing_time()
        if time_end >= self.MAX_TIME_REQUEST:
            self.error = (
                f"Marusia.get_context(): Превышено ограничение на отправку ответа. "
                f"Время ответа составило: {time_end / 1000} сек."
            )
        return result

    def is_local_storage(self) -> bool:
        return self.controller is not None and self.controller.state is not None

    def get_local_storage(self) -> Any:
        return self.controller.state
