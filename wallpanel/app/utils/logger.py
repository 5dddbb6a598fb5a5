import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .config import get_config
from .error_reporting import ErrorReportHandler


def setup_logging(name: str = "wallpanel") -> logging.Logger:
    config = get_config()
    log_config = config.logging

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, log_config.level))
    logger.handlers.clear()

    formatter = logging.Formatter(log_config.format)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_config.file_path:
        log_path = Path(log_config.file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=log_config.max_bytes,
            backupCount=log_config.backup_count,
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if log_config.error_report_path:
        report_path = Path(log_config.error_report_path)
        report_path.parent.mkdir(parents=True, exist_ok=True)
        logger.addHandler(ErrorReportHandler(_json_lines_sink(report_path)))

    return logger


def _json_lines_sink(path: Path):
    def sink(report: dict) -> None:
        with open(path, "a", encoding="utf-8") as f:
            f.write(json.dumps(report, ensure_ascii=False) + "\n")

    return sink


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"wallpanel.{name}")
