"""CLI: запуск вебхук сервера навыка или диалога в консоли (--test)."""
import argparse
import sys

from umbot.config.factory import ComponentFactory
from umbot.config.loader import load_config
from umbot.config.models import PLATFORM_TYPES
from umbot.controller import BaseBotController
from umbot.core.console import BotTest


def parse_args():
    """Парсит аргументы командной строки."""
    parser = argparse.ArgumentParser(
        description="Вебхук сервер навыка: Алиса, Маруся, Сбер SmartApp, VK, Telegram, Viber",
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Путь к файлу конфигурации (по умолчанию: config.yaml, если есть)"
    )

    parser.add_argument(
        "--platform",
        choices=PLATFORM_TYPES,
        help="Платформа вебхука (переопределяет platform_type из конфига)"
    )

    parser.add_argument(
        "--host",
        type=str,
        help="Адрес сервера (переопределяет server.host)"
    )

    parser.add_argument(
        "--port",
        type=int,
        help="Порт сервера (переопределяет server.port)"
    )

    parser.add_argument(
        "--test",
        action="store_true",
        help="Диалог с навыком в консоли вместо запуска сервера"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="umbot 0.1.0"
    )

    return parser.parse_args()


def main():
    args = parse_args()

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ Ошибка загрузки конфигурации: {e}")
        sys.exit(1)

    if args.platform:
        config.platform_type = args.platform
    if args.host:
        config.server.host = args.host
    if args.port:
        config.server.port = args.port

    factory = ComponentFactory(config)
    logger = factory.get_logger()

    if args.test:
        bot = BotTest(factory.get_app_context(), BaseBotController)
        try:
            bot.test()
        except KeyboardInterrupt:
            print()
        finally:
            bot.app_context.close()
        return

    print("=" * 70)
    print("🚀 UMBOT: ВЕБХУК СЕРВЕР")
    print("=" * 70)
    print(f"🤖 Платформа: {config.platform_type}")
    print(f"🌐 Адрес: http://{config.server.host}:{config.server.port}/")
    print(f"💾 Хранилище: {'MongoDB' if config.is_save_db else config.json_dir}")
    print("=" * 70 + "\n")

    try:
        bot = factory.get_bot()
        bot.start()
    except KeyboardInterrupt:
        print("\n\n⚠️  Сервер остановлен пользователем")
        sys.exit(130)
    except Exception as e:
        logger.exception("Критическая ошибка сервера")
        print(f"\n❌ КРИТИЧЕСКАЯ ОШИБКА: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
