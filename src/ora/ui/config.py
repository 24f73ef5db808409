"""UI configuration constants.

Centralizes magic numbers and display values for the UI module.
"""

import logging


class LogLevel:
    """Log level constants with numeric values for comparison.

    Mirrors the standard logging hierarchy: DEBUG < INFO < WARNING < ERROR.
    Lower numeric value = more verbose (shows more messages).
    """

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR

    _names = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARNING",
        ERROR: "ERROR",
    }

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the name for a log level."""
        return cls._names.get(level, "UNKNOWN")

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns DEBUG if invalid."""
        return cls._from_string.get(level_str.lower(), cls.DEBUG)


# Input history configuration
INPUT_HISTORY_MAX_SIZE = 100  # Maximum entries in input history

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages

# Chat display configuration
MESSAGE_TIMESTAMP_FORMAT = "%H:%M:%S"
ASSISTANT_NAME = "ORA"
FEEDBACK_MARKS = {
    "thumbs_up": "👍",
    "thumbs_down": "👎",
}

WELCOME_MESSAGE = (
    "Hi, I'm ORA. Ask me about leadership, training, human health or AI trends, "
    "or tell me how to configure your panel, for example "
    "\"connect news to CNN\" or \"set calendar to Outlook\"."
)
