"""Адаптер Яндекс Алисы."""
from typing import TYPE_CHECKING, Any

from umbot.components.button.buttons import T_ALISA_BUTTONS
from umbot.core.app_context import AppContext
from umbot.platforms.base import BasePlatform
from umbot.utils.text import resize

if TYPE_CHECKING:
    from umbot.controller import BotController


class Alisa(BasePlatform):
    """
    Навык Алисы.

    Ответ возвращается в теле вебхука:
        {"version": "1.0", "response": {...}, "<state>": {...}}
    """

    VERSION = "1.0"
    # мс, после которых Алиса считает ответ просроченным
    MAX_TIME_REQUEST = 2800
    MAX_TEXT_LENGTH = 1024
    STATE_NAMES = (
        ("user", "user_state_update"),
        ("application", "application_state"),
        ("session", "session_state"),
    )

    def __init__(self, app_context: AppContext) -> None:
        super().__init__(app_context)
        self._session: dict[str, Any] = {}
        self._is_state = False
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

    def _set_state(self, state: dict[str, Any]) -> None:
        for key, state_name in self.STATE_NAMES:
            if key in state:
                self.controller.state = state[key]
                self._state_name = state_name
                return

    def _init_user_command(self, request: dict[str, Any]) -> None:
        controller = self.controller
        if request.get("type") == "SimpleUtterance":
            controller.user_command = (request.get("command") or "").strip()
            controller.original_user_command = (request.get("original_utterance") or "").strip()
        else:
            payload = request.get("payload")
            if isinstance(payload, str):
                controller.user_command = payload
                controller.original_user_command = payload
            else:
                controller.user_command = (request.get("command") or "").strip()
                controller.original_user_command = (request.get("original_utterance") or "").strip()
            controller.payload = payload
        if not controller.user_command:
            controller.user_command = controller.original_user_command

    def _set_user_id(self) -> None:
        user_id = None
        self._is_state = False
        if self.app_context.params.y_is_auth_user:
            user = self._session.get("user") or {}
            if user.get("user_id"):
                user_id = user["user_id"]
                self._is_state = True
                self.controller.user_token = user.get("access_token")
        if user_id is None:
            application = self._session.get("application") or {}
            user_id = application.get("application_id") or self._session.get("user_id")
        self.controller.user_id = user_id
        self.app_context.params.user_id = user_id

    def init(self, query: str | dict[str, Any] | None, controller: "BotController") -> bool:
        content = self._parse_query(query)
        if not content:
            self.error = "Alisa.init(): Отправлен пустой запрос!"
            return False
        self.controller = controller
        if "session" not in content and "request" not in content:
            if "account_linking_complete_event" in content:
                controller.user_events = {"auth": {"status": True}}
                controller.is_auth_success = True
                return True
            self.error = "Alisa.init(): Не корректные данные!"
            return False

        controller.request_object = content
        request = content.get("request") or {}
        self._init_user_command(request)
        self._session = content.get("session") or {}
        self._set_user_id()
        controller.nlu.set_nlu(request.get("nlu"))
        controller.user_meta = content.get("meta") or {}
        controller.message_id = self._session.get("message_id")
        if "state" in content:
            self._set_state(content["state"] or {})

        self.app_context.params.app_id = self._session.get("skill_id")
        controller.is_screen = "screen" in (controller.user_meta.get("interfaces") or {})
        if controller.original_user_command == "ping":
            controller.text = "pong"
            self.send_in_init = self.get_context()
        return True

    def get_context(self) -> dict[str, Any]:
        controller = self.controller
        result: dict[str, Any] = {"version": self.VERSION}
        if controller.is_auth and controller.user_token is None:
            result["start_account_linking"] = {}
        else:
            self._init_tts()
            result["response"] = self._get_response()
        if (self._is_state or self.is_used_local_storage) and self._state_name:
            if self.is_used_local_storage and controller.user_data:
                result[self._state_name] = controller.user_data
            elif controller.state:
                result[self._state_name] = controller.state
        time_end = self.get_processing_time()
        if time_end >= self.MAX_TIME_REQUEST:
            self.error = (
                f"Alisa.get_context(): Превышено ограничение на отправку ответа. "
                f"Время ответа составило: {time_end / 1000} сек."
            )
        return result

    def is_local_storage(self) -> bool:
        return self.controller is not None and self.controller.state is not None

    def get_local_storage(self) -> Any:
        return self.controller.state
