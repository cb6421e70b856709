"""Обработка вебхука: адаптер платформы, контроллер и данные пользователя."""
import json
from typing import TYPE_CHECKING, Any, Callable

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from umbot.core.app_context import AppContext
from umbot.exceptions import BotError
from umbot.models.users_data import UsersData
from umbot.platforms.registry import get_platform

if TYPE_CHECKING:
    from umbot.controller import BotController
    from umbot.protocols import PlatformProtocol

ControllerFactory = Callable[[AppContext], "BotController"]

NOT_FOUND = "notFound"
OLD_INTENT_KEY = "old_intent_name"


class Bot:
    """
    Точка входа приложения.

    Для каждого запроса создаётся свой контекст (копия параметров
    платформы), адаптер платформы и контроллер.
    """

    def __init__(self, app_context: AppContext, controller_factory: ControllerFactory) -> None:
        """
        Parameters
        ----------
        app_context : AppContext
            Контекст приложения.
        controller_factory : callable
            Класс контроллера (или фабрика), принимающий AppContext.
        """
        self.app_context = app_context
        self.controller_factory = controller_factory

    def _create_controller(self, context: AppContext) -> "BotController":
        return self.controller_factory(context)

    def _init_platform(
        self,
        query: str | dict[str, Any] | None,
        app_type: str,
        context: AppContext,
        controller: "BotController"
    ) -> "PlatformProtocol":
        platform = get_platform(app_type, context)
        if platform is None:
            message = f"Bot.run(): Не удалось определить тип приложения: {app_type}"
            context.log_error(message)
            raise BotError(message)
        try:
            is_init = platform.init(query, controller)
        except ValueError as e:
            message = f"Bot.run(): Не удалось разобрать запрос: {e}"
            context.log_error(message)
            raise BotError(message) from e
        if not is_init:
            message = platform.get_error() or "Bot.run(): Некорректный запрос"
            context.log_error(message)
            raise BotError(message)
        return platform

    def run(
        self,
        query: str | dict[str, Any] | None,
        platform_type: str | None = None,
        user_token: str | None = None
    ) -> Any:
        """
        Обрабатывает один запрос платформы.

        Parameters
        ----------
        query : str | dict
            Тело вебхука.
        platform_type : str, optional
            Платформа запроса. По умолчанию платформа из контекста.
        user_token : str, optional
            Токен авторизации пользователя (заголовок Authorization).

        Returns
        -------
        Any
            Ответ платформе: dict для Алисы, Маруси и SmartApp, 'ok' для
            VK, Telegram и Viber, строка подтверждения для VK.

        Raises
        ------
        BotError
            Неизвестная платформа или некорректный запрос.
        """
        app_type = platform_type or self.app_context.app_type
        context = self.app_context.fork(app_type)
        controller = self._create_controller(context)
        if user_token:
            controller.user_token = user_token

        platform = self._init_platform(query, app_type, context, controller)
        if platform.send_in_init is not None:
            return platform.send_in_init

        users_data = UsersData(context)
        users_data.type = UsersData.type_for(app_type)
        is_local_storage = bool(context.config.is_local_storage and platform.is_local_storage())
        is_new = True
        if is_local_storage:
            platform.is_used_local_storage = True
            controller.user_data = platform.get_local_storage()
        else:
            users_data.user_id = str(user_token or controller.user_id)
            if users_data.where_one({"user_id": users_data.user_id}):
                controller.user_data = users_data.data
                is_new = False
            else:
                users_data.meta = controller.user_meta
        if not isinstance(controller.user_data, dict):
            controller.user_data = {}

        if not controller.old_intent_name and controller.user_data.get(OLD_INTENT_KEY):
            controller.old_intent_name = controller.user_data[OLD_INTENT_KEY]

        controller.run()

        if controller.this_intent_name is not None:
            controller.user_data[OLD_INTENT_KEY] = controller.this_intent_name
        else:
            controller.user_data.pop(OLD_INTENT_KEY, None)

        if controller.is_send_rating:
            content = platform.get_rating_context()
        else:
            content = platform.get_context()

        if is_local_storage:
            platform.set_local_storage(controller.user_data)
        else:
            users_data.data = controller.user_data
            if is_new:
                is_saved = users_data.save(True)
            else:
                is_saved = users_data.update()
            if not is_saved:
                context.log_error(f"Bot.run(): Не удалось сохранить данные пользователя: {controller.user_id}")

        error = platform.get_error()
        if error:
            context.log_warn(error)
        return platform.deliver(content)

    def create_app(self, platform_type: str | None = None) -> FastAPI:
        """
        Создаёт FastAPI приложение с вебхуком POST /.

        Заголовок 'Authorization: Bearer <token>' передаётся в контроллер
        как user_token. Некорректный запрос возвращает 404 notFound.
        """
        app = FastAPI(title="umbot", version="0.1.0")

        @app.post("/")
        async def webhook(request: Request) -> Response:
            try:
                query = await request.json()
            except json.JSONDecodeError:
                return PlainTextResponse("Bad Request", status_code=400)
            if not query:
                return PlainTextResponse("Bad Request", status_code=400)

            authorization = request.headers.get("authorization")
            user_token = authorization.replace("Bearer", "").strip() if authorization else None
            try:
                result = await run_in_threadpool(self.run, query, platform_type, user_token)
            except BotError:
                return PlainTextResponse(NOT_FOUND, status_code=404)
            if result == NOT_FOUND:
                return PlainTextResponse(NOT_FOUND, status_code=404)
            if isinstance(result, str):
                return PlainTextResponse(result)
            return JSONResponse(result)

        return app

    def start(self, host: str | None = None, port: int | None = None, platform_type: str | None = None) -> None:
        """Запускает HTTP сервер вебхука через uvicorn."""
        import uvicorn

        server = self.app_context.config.server
        host = host or server.host
        port = port or server.port
        self.app_context.logger.info(f"Сервер запущен: http://{host}:{port}/")
        try:
            uvicorn.run(self.create_app(platform_type), host=host, port=port)
        finally:
            self.app_context.close()
