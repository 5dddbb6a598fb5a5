"""
Error-only log reporting.

Only records at ERROR level are forwarded to the report sink; everything
else stays with the regular console and file handlers.
"""

import logging
import traceback
from typing import Callable, Iterable, Optional

REPORT_KEY_PRIORITY = "priority"
REPORT_KEY_TAG = "tag"
REPORT_KEY_MESSAGE = "message"
REPORT_KEY_EXCEPTION = "exception"

# Frames from these files are reporting plumbing, not the failure site
_PLUMBING_MARKERS = (logging.__file__, __file__)


class ErrorOnlyFilter(logging.Filter):
    """Pass records logged at exactly ERROR level."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno == logging.ERROR


def trimmed_traceback(
    exc: BaseException, markers: Iterable[str] = _PLUMBING_MARKERS
) -> list[str]:
    """
    Format the traceback of exc without its leading plumbing frames.

    Leading frames whose filename contains one of markers are dropped. If
    every frame matches, the traceback is returned untouched.
    """
    frames = traceback.extract_tb(exc.__traceback__)
    markers = tuple(markers)

    trim = 0
    for i, frame in enumerate(frames):
        if not any(marker in frame.filename for marker in markers):
            trim = i
            break

    return traceback.format_list(frames[trim:])


class ErrorReportHandler(logging.Handler):
    """
    Build a report for every ERROR record and hand it to sink.

    Args:
        sink: Callable receiving the report dict
        level: Handler level (records below it never reach the filter)
    """

    def __init__(self, sink: Callable[[dict], None], level: int = logging.ERROR):
        super().__init__(level)
        self.sink = sink
        self.addFilter(ErrorOnlyFilter())

    def build_report(self, record: logging.LogRecord) -> dict:
        report = {
            REPORT_KEY_PRIORITY: record.levelname,
            REPORT_KEY_TAG: record.name,
            REPORT_KEY_MESSAGE: record.getMessage(),
        }
        exc: Optional[BaseException] = record.exc_info[1] if record.exc_info else None
        if exc is not None:
            report[REPORT_KEY_EXCEPTION] = {
                "type": type(exc).__name__,
                "value": str(exc),
                "traceback": trimmed_traceback(exc),
            }
        return report

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.sink(self.build_report(record))
        except Exception:
            self.handleError(record)
