import logging
import logging.handlers
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .config import Settings, get_settings

FILE_LOG_FORMAT = (
    "%(asctime)s - %(levelname)s - "
    "%(filename)s:%(lineno)d in %(funcName)s() - "
    "%(message)s"
)


def _build_console_handler(settings: Settings) -> RichHandler:
    handler = RichHandler(
        console=Console(width=120),
        show_time=True,
        show_level=True,
        show_path=True,
        markup=True,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
    )
    handler.setLevel(settings.log_level)
    return handler


def _build_file_handler(settings: Settings) -> logging.Handler:
    # Ny fil ved midnat, gamle filer slettes efter log_retention_days
    settings.log_directory.mkdir(parents=True, exist_ok=True)
    handler = logging.handlers.TimedRotatingFileHandler(
        filename=settings.log_file_path,
        when="midnight",
        interval=1,
        backupCount=settings.log_retention_days,
        encoding="utf-8",
    )
    handler.setLevel(settings.log_level)
    handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
    return handler


def setup_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Configure the root logger for applications embedding dkutils.

    The library itself only emits records; nothing is configured on import.
    Calling this again replaces the handlers installed by the previous call.
    """
    settings = settings or get_settings()

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level)
    root_logger.handlers.clear()

    root_logger.addHandler(_build_console_handler(settings))
    if settings.log_to_file:
        root_logger.addHandler(_build_file_handler(settings))

    logging.info(
        f"[bold green]dkutils logging ready[/] - "
        f"Level: [yellow]{settings.log_level}[/], "
        f"File: [cyan]{settings.log_file_path if settings.log_to_file else 'disabled'}[/]"
    )
    return root_logger
