import logging
import os
from logging.handlers import TimedRotatingFileHandler


LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def get_logger(config: dict, process_name: str, logger_name: str | None = None) -> logging.Logger:
    """
    Настраивает логгер навыка с отдельной директорией и файлами логов.

    Хэндлеры: основной файл с ежедневной ротацией, консоль, отдельные файлы
    для предупреждений и ошибок. Ошибки обращения к API платформ, хранилища
    и некорректные запросы попадают в {process_name}_error.log.

    Parameters
    ----------
    config : dict
        Параметры логирования:

        - log_dir : str
            Корневая директория для логов (по умолчанию 'logs')
        - level : str, optional
            Уровень логирования ('debug', 'info', 'warning', 'error', 'critical')
        - max_log_days : int
            Количество дней хранения архивных лог-файлов

    process_name : str
        Имя приложения, используется для директории и имён файлов
    logger_name : Optional[str], optional
        Имя логгера. Если не указано, используется process_name

    Returns
    -------
    logging.Logger
        Настроенный логгер

    Raises
    ------
    OSError
        Возникает при проблемах с созданием директории логов или файлов

    Notes
    -----
    - Основной лог-файл ротируется ежедневно в полночь
    - При повторном вызове с тем же именем старые хэндлеры удаляются
    - Сообщения не передаются в root логгер
    """
    log_root = config.get("log_dir", "logs")

    process_log_dir = os.path.join(log_root, process_name)
    os.makedirs(process_log_dir, exist_ok=True)

    level = LEVELS.get(config.get("level", "info"), logging.INFO)

    # === Основной файл с ротацией ===
    log_file_path = os.path.join(process_log_dir, f"{process_name}.log")
    file_handler = TimedRotatingFileHandler(
        log_file_path,
        when="midnight",
        interval=1,
        backupCount=config.get("max_log_days", 7),
        encoding="utf-8"
    )
    file_formatter = logging.Formatter('%(asctime)s - %(levelname)s - [%(module)s] %(message)s')
    file_handler.setFormatter(file_formatter)
    file_handler.setLevel(level)

    # === Консоль ===
    console_handler = logging.StreamHandler()
    console_formatter = logging.Formatter('%(asctime)s - %(levelname)s - [%(name)s] [%(module)s] %(message)s')
    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(level)

    # === Предупреждения ===
    warning_log_path = os.path.join(process_log_dir, f"{process_name}_warning.log")
    warning_handler = logging.FileHandler(warning_log_path, encoding="utf-8")
    warning_handler.setLevel(logging.WARNING)
    warning_handler.setFormatter(file_formatter)

    # === Ошибки ===
    error_log_path = os.path.join(process_log_dir, f"{process_name}_error.log")
    error_handler = logging.FileHandler(error_log_path, encoding="utf-8")
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(file_formatter)

    logger_name = logger_name or process_name
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    if logger.hasHandlers():
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)
    logger.addHandler(warning_handler)
    logger.addHandler(error_handler)

    logger.propagate = False

    return logger
