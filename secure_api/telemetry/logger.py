from __future__ import annotations

import gzip
import logging
import os
import shutil
import sys
from logging.handlers import TimedRotatingFileHandler

from pythonjsonlogger.json import JsonFormatter

from ..config import Settings

_JSON_FIELDS = "%(asctime)s %(name)s %(levelname)s %(message)s"
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _gzip_namer(default_name: str) -> str:
    return default_name + ".gz"


def _gzip_rotator(source: str, dest: str) -> None:
    with open(source, "rb") as f_in, gzip.open(dest, "wb") as f_out:
        shutil.copyfileobj(f_in, f_out)
    os.remove(source)


def _formatter(settings: Settings) -> logging.Formatter:
    if settings.log_format == "json":
        return JsonFormatter(
            _JSON_FIELDS,
            rename_fields={"asctime": "timestamp", "levelname": "level"},
        )
    return logging.Formatter(_TEXT_FORMAT)


def _rotating_handler(settings: Settings, filename: str, level: int) -> TimedRotatingFileHandler:
    """Daily rotation at midnight; rotated files are gzip-compressed."""
    handler = TimedRotatingFileHandler(
        os.path.join(settings.log_dir, filename),
        when="midnight",
        interval=1,
        backupCount=settings.log_backup_count,
        encoding="utf-8",
    )
    handler.namer = _gzip_namer
    handler.rotator = _gzip_rotator
    handler.setLevel(level)
    return handler


def configure_logging(settings: Settings) -> None:
    """
    Configure the root logger once per process.

    Console output always; when ``log_dir`` is set, also ``access.log``
    (every record at the configured level) and ``error.log`` (errors only).
    """
    root = logging.getLogger()
    if getattr(root, "_secure_api_configured", False):
        return
    root.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    formatter = _formatter(settings)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if settings.log_dir:
        os.makedirs(settings.log_dir, exist_ok=True)
        handlers.append(_rotating_handler(settings, "access.log", logging.NOTSET))
        handlers.append(_rotating_handler(settings, "error.log", logging.ERROR))

    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root._secure_api_configured = True
