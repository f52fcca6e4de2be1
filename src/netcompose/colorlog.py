"""
File Chain (see DEVELOPER.md):
Doc Version: v1.0.0

- Called by: main.py
- Purpose: ANSI color-coded log formatter with key=value context

NetCompose Color Log Formatter

PURPOSE:
    Colorizes console log output by severity and appends the structured
    context handed to the logger via ``extra=`` as ``key=value`` pairs, so
    that ``_LOGGER.info("Function ran OK", extra={"id": "code"})`` prints
    ``... Function ran OK id=code - (compose.py:42)``.

WHO READS ME:
    - main.py: Uses CustomFormatter for console log handler

WHO I READ:
    - None (leaf module, no internal dependencies)

COLOR SCHEME:
    - DEBUG: Grey
    - INFO: Cyan
    - WARNING: Yellow
    - ERROR: Red
    - CRITICAL: Bold Red
"""

import logging

# attributes every LogRecord has, anything else came in through extra=
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime", "context"}


class CustomFormatter(logging.Formatter):
    """return a formatter that prints log messages with color and context"""

    grey = "\x1b[38;20m"
    yellow = "\x1b[33;20m"
    red = "\x1b[31;20m"
    cyan = "\x1b[36;20m"
    bold_red = "\x1b[31;1m"
    reset = "\x1b[0m"
    template = "%(asctime)s - %(levelname)s - %(message)s%(context)s - (%(filename)s:%(lineno)d)"

    COLORS = {
        logging.DEBUG: grey,
        logging.INFO: cyan,
        logging.WARNING: yellow,
        logging.ERROR: red,
        logging.CRITICAL: bold_red,
    }

    def __init__(self, color: bool = True):
        super().__init__()
        self.color = color

    @staticmethod
    def context_of(record: logging.LogRecord) -> str:
        pairs = [
            f"{key}={value}"
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        ]
        return " " + " ".join(pairs) if pairs else ""

    def format(self, record):
        record.context = self.context_of(record)
        log_fmt = self.template
        if self.color:
            log_fmt = self.COLORS.get(record.levelno, "") + log_fmt + self.reset
        formatter = logging.Formatter(log_fmt)
        return formatter.format(record)
