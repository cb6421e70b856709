"""Локальная проверка навыка в консоли без платформы и вебхука."""
import json
import time
from typing import TYPE_CHECKING, Any, Callable

from umbot.core.app_context import T_ALISA, T_MARUSIA, T_TELEGRAM, T_VIBER, T_VK, AppContext
from umbot.core.bot import Bot, ControllerFactory
from umbot.exceptions import BotError
from umbot.platforms.templates import REQUEST_TEMPLATES

if TYPE_CHECKING:
    from umbot.controller import BotController

LOCAL_USER_ID = "user_local_test"
EXIT_COMMAND = "exit"
PUSH_PLATFORMS = (T_VK, T_TELEGRAM, T_VIBER)


class BotTest(Bot):
    """
    Диалог с навыком в консоли.

    Запросы пользователя оборачиваются в шаблон вебхука текущей
    платформы и проходят через Bot.run(). Для VK, Telegram и Viber
    отправка ответа через API отключается, ответ берётся из контроллера.
    Изображения, звуки и кнопки не отображаются.
    """

    def __init__(self, app_context: AppContext, controller_factory: ControllerFactory) -> None:
        super().__init__(app_context, controller_factory)
        self.controller: "BotController | None" = None

    def _create_controller(self, context: AppContext) -> "BotController":
        controller = super()._create_controller(context)
        if context.app_type in PUSH_PLATFORMS:
            controller.is_send = False
        self.controller = controller
        return controller

    def get_skill_content(self, query: str, count: int, state: Any = None) -> dict[str, Any]:
        """
        Собирает тело вебхука текущей платформы.

        Raises
        ------
        BotError
            Для платформы нет шаблона запроса.
        """
        app_type = self.app_context.app_type
        template = REQUEST_TEMPLATES.get(app_type)
        if template is None:
            raise BotError(f"BotTest: Нет шаблона запроса для платформы: {app_type}")
        return template(query, LOCAL_USER_ID, count, state)

    def _get_answer(self, result: Any) -> str:
        if self.app_context.app_type in (T_ALISA, T_MARUSIA) and isinstance(result, dict):
            response = result.get("response") or {}
            return response.get("text") or response.get("tts") or ""
        return self.controller.text or ""

    def test(
        self,
        is_show_result: bool = False,
        is_show_storage: bool = False,
        is_show_time: bool = True,
        input_func: Callable[[str], str] = input,
        output: Callable[[str], Any] = print
    ) -> None:
        """
        Запускает диалог. Первое сообщение "Привет" отправляется автоматически.

        Parameters
        ----------
        is_show_result : bool, optional
            Печатать полный ответ платформе.
        is_show_storage : bool, optional
            Печатать данные пользователя после обработки.
        is_show_time : bool, optional
            Печатать время обработки запроса.
        input_func : callable, optional
            Источник реплик пользователя (по умолчанию input).
        output : callable, optional
            Вывод реплик бота (по умолчанию print).
        """
        output(f"Для выхода введите {EXIT_COMMAND}\n")
        count = 0
        state: Any = {}
        while True:
            if count == 0:
                query = "Привет"
            else:
                try:
                    query = input_func("Вы: > ")
                except EOFError:
                    break
                if query.strip() == EXIT_COMMAND:
                    break

            content = self.get_skill_content(query, count, state)
            time_start = time.monotonic()
            result = self.run(content)

            if is_show_result:
                output(f"Результат работы: > \n{json.dumps(result, ensure_ascii=False)}\n")
            if is_show_storage:
                output(f"Данные в хранилище > \n{json.dumps(self.controller.user_data, ensure_ascii=False)}\n")
            output(f"Бот: > {self._get_answer(result)}\n")
            if is_show_time:
                output(f"Время выполнения: {int((time.monotonic() - time_start) * 1000)} мс\n")

            if self.controller.is_end:
                break
            state = self.controller.user_data
            count += 1
