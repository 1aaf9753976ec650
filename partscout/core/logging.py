"""로깅 설정"""
import logging
import sys

from partscout.core.config import Settings

LOGGER_NAME = "partscout"


def setup_logging(settings: Settings) -> logging.Logger:
    """로거 초기화 및 설정"""

    logger = logging.getLogger(LOGGER_NAME)

    # Production에서는 최소 INFO 레벨
    log_level = settings.log_level.upper()
    if settings.is_production and log_level == "DEBUG":
        log_level = "INFO"
    level = getattr(logging, log_level, logging.INFO)

    logger.setLevel(level)

    if settings.is_production:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        logger.addHandler(console_handler)

    for handler in logger.handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    return logger


def get_logger(name: str) -> logging.Logger:
    """`partscout` 하위 로거 반환 (핸들러는 부모에서 상속)"""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def sanitize_for_log(value: str, max_length: int = 100) -> str:
    """사용자 입력을 로그에 남기기 전에 절단

    Args:
        value: 로깅할 문자열
        max_length: 최대 길이

    Returns:
        절단된 문자열
    """
    if not value:
        return "[empty]"

    result = value.replace("\n", " ").replace("\r", " ")
    if len(result) > max_length:
        result = result[:max_length] + "..."
    return result
