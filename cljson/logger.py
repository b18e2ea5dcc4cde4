from typing import NotRequired, TypedDict
import logging
from cljson.utils import resolve_config


class LoggerConfig(TypedDict):
    name: NotRequired[str]
    is_enabled: NotRequired[bool]
    level: NotRequired[int]
    format: NotRequired[str]


class LoggerConfigRequired(TypedDict):
    name: str
    is_enabled: bool
    level: int
    format: str


DEFAULT_LOGGER_CONFIG: LoggerConfigRequired = {
    "name": "cljson",
    "is_enabled": True,
    "level": logging.DEBUG,
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


class Logger:
    """Named stdlib logger set up from a ``LoggerConfig``.

    The lexer and parser build theirs with ``is_enabled`` taken from their
    ``enable_logger`` key, which is off by default, so a plain ``parse()``
    stays silent. Only an enabled logger gets the console handler and level.
    """

    def __init__(self, config: LoggerConfig | None = None):
        self.config = resolve_config(config or {}, DEFAULT_LOGGER_CONFIG)
        self.logger = logging.getLogger(self.config["name"])
        self.set_configuration()

    @property
    def has_console_handler(self) -> bool:
        return any(isinstance(handler, logging.StreamHandler) for handler in self.logger.handlers)

    def set_configuration(self):
        if not self.config["is_enabled"]:
            self.logger.disabled = True
            return

        self.logger.disabled = False
        self.logger.setLevel(self.config["level"])
        # loggers are process-wide singletons, one console handler per name
        if self.has_console_handler:
            return
        self.formatter = logging.Formatter(self.config["format"])
        self.ch = logging.StreamHandler()
        self.ch.setFormatter(self.formatter)
        self.logger.addHandler(self.ch)
