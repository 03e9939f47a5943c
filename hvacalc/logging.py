import logging
from logging import Handler, Logger
from pathlib import Path

PACKAGE_LOGGER = 'hvacalc'


class ModuleLogger:
    """Factory of the loggers used by the calculator modules.

    Each module gets its own logger with `ModuleLogger.get_logger(__name__)`.
    The handlers are attached to the package logger 'hvacalc' only: records of
    all modules propagate to it, so they share a single console handler (and
    file handler, see `log_to_file`) and the same record format.

    Module loggers start at level WARNING, so that only solver problems reach
    the console. Use `set_level(ModuleLogger.DEBUG)` to follow the
    intermediate results of the calculations.
    """
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING

    # formatting of the log records
    FORMATTER = logging.Formatter(
        '[%(process)s | %(name)s | %(levelname)s] %(message)s'
    )

    @classmethod
    def _attach(cls, handler: Handler, log_level: int) -> Handler:
        handler.setFormatter(cls.FORMATTER)
        handler.setLevel(log_level)
        logging.getLogger(PACKAGE_LOGGER).addHandler(handler)
        return handler

    @classmethod
    def get_logger(cls, logger_name: str, log_level: int = logging.WARNING) -> Logger:
        """Returns the logger with `logger_name`.

        On the first call the package logger receives its console handler.
        A logger that is requested again keeps the level it already has.
        """
        package_logger = logging.getLogger(PACKAGE_LOGGER)
        if not package_logger.handlers:
            cls._attach(logging.StreamHandler(), cls.DEBUG)
        logger = logging.getLogger(logger_name)
        if logger.level == logging.NOTSET:
            logger.setLevel(log_level)
        return logger

    @classmethod
    def log_to_file(cls, file_path: Path | str, log_level: int = logging.DEBUG) -> Handler:
        """Also writes the records of all calculator modules to the file at
        `file_path` (appending to it). Returns the file handler, which can be
        removed again from the package logger.
        """
        handler = logging.FileHandler(file_path, mode='a', encoding='utf-8')
        return cls._attach(handler, log_level)

    @classmethod
    def set_level(cls, log_level: int) -> None:
        """Sets `log_level` on every module logger of the package that was
        already created.
        """
        prefix = PACKAGE_LOGGER + '.'
        for name in list(logging.root.manager.loggerDict):
            if name.startswith(prefix):
                logging.getLogger(name).setLevel(log_level)
