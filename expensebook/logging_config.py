"""
Logging — конфигурация structlog для expensebook

structlog поверх stdlib logging:
- console renderer для разработки
- JSON renderer при json_logs=True

Модули библиотеки только вызывают structlog.get_logger(__name__);
приложение вызывает configure_logging() один раз при старте.
"""

import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import EventDict

from expensebook.config import CoreSettings, get_settings


def add_log_level(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Уровень лога в верхнем регистре в event dict."""
    if method_name == "warn":
        method_name = "warning"
    event_dict["level"] = method_name.upper()
    return event_dict


def configure_logging(
    log_level: Optional[str] = None,
    json_logs: Optional[bool] = None,
    settings: Optional[CoreSettings] = None,
) -> None:
    """
    Настройка структурированного логирования.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR или CRITICAL (default: settings)
        json_logs: JSON вместо консольных строк (default: settings)
        settings: Источник значений по умолчанию (default: get_settings())
    """
    settings = settings or get_settings()
    level_name = (log_level or settings.log_level).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)
    use_json = settings.json_logs if json_logs is None else json_logs

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
        force=True,
    )

    renderer: Any
    if use_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
