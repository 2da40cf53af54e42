import json
import logging
import os
import pathlib
import sys
import traceback
from typing import Optional, Union


class ContextualLogRecord(logging.LogRecord):
    """
    Custom LogRecord that captures the file, line and function of the caller
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        if not self.exc_info and sys.exc_info()[0] is not None:
            self.exc_info = sys.exc_info()

        self.source_file = "Unknown"
        self.line_number = 0
        self.source_function = "Unknown"

        try:
            if self.levelno >= logging.ERROR and self.exc_info:
                tb = traceback.extract_tb(self.exc_info[2])
                if tb:
                    self._set_source(tb[-1])
            else:
                stack = traceback.extract_stack()
                for frame in reversed(stack[:-2]):
                    filename = os.path.basename(frame.filename)
                    if all(
                        module not in filename
                        for module in ["logging", __file__, "contextlib"]
                    ):
                        self._set_source(frame)
                        break
        except Exception:
            # context is best effort; the record itself must still be emitted
            self.source_file = "Unknown"
            self.line_number = 0
            self.source_function = "Unknown"

    def _set_source(self, frame: traceback.FrameSummary) -> None:
        self.source_file = os.path.basename(frame.filename)
        self.line_number = frame.lineno
        self.source_function = frame.name


class ContextFilter(logging.Filter):
    """
    A logging filter that ensures contextual information is added to log records
    """

    def filter(self, record):
        if not hasattr(record, "source_file"):
            record.source_file = "Unknown"
        if not hasattr(record, "line_number"):
            record.line_number = 0
        if not hasattr(record, "source_function"):
            record.source_function = "Unknown"
        return True


class JsonFormatter(logging.Formatter):
    """JSON log formatter"""

    fmt_keys = {
        "timestamp": "%(asctime)s",
        "level": "%(levelname)s",
        "message": "%(message)s",
        "logger": "%(name)s",
        "function": "%(funcName)s",
        "source_function": "%(source_function)s",
        "line": "%(line_number)d",
        "source_file": "%(source_file)s",
    }

    def format(self, record: logging.LogRecord) -> str:
        record.message = record.getMessage()

        message = {}
        for key, value in self.fmt_keys.items():
            if key == "timestamp":
                value = self.formatTime(record, self.datefmt)
            elif key == "message":
                value = record.message
            else:
                try:
                    value = value % record.__dict__
                except (KeyError, ValueError, TypeError):
                    value = "Unknown"
            message[key] = value

        if record.exc_info:
            message["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(message)


def configure_logging(
    debug_mode: bool = False, log_dir: Optional[Union[str, pathlib.Path]] = None
):
    """
    Configure logging with a console handler and, when log_dir is set, a JSON
    file handler

    Args:
        debug_mode: Whether to force DEBUG level logging on the console
        log_dir: Directory for validate.log; no file logging when None
    """
    logging.setLogRecordFactory(ContextualLogRecord)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    context_filter = ContextFilter()

    # console - warnings by default so the rendered report stays readable
    console_stream_handler = logging.StreamHandler(sys.stderr)
    console_stream_handler.addFilter(context_filter)
    console_stream_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    console_stream_handler.setLevel(logging.DEBUG if debug_mode else logging.WARNING)
    root_logger.addHandler(console_stream_handler)

    if log_dir is not None:
        log_path = pathlib.Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        # <log_dir>/validate.log - gets everything
        file_handler = logging.FileHandler(log_path / "validate.log")
        file_handler.addFilter(context_filter)
        file_handler.setFormatter(JsonFormatter())
        file_handler.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)

    root_logger.setLevel(logging.DEBUG)
