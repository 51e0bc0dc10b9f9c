import contextvars

from easy_expose.logging.models import LogLevel, LogLevelName

from .stream_type import LogOutput, StreamType


_log_level = contextvars.ContextVar('_log_level', default=LogLevel.INFO)
_log_output = contextvars.ContextVar('_log_output', default=StreamType.STDERR)
_log_directory: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    '_log_directory',
    default=None,
)
_logging_disabled = contextvars.ContextVar('_logging_disabled', default=False)
_disabled_loggers: contextvars.ContextVar[frozenset[str]] = contextvars.ContextVar(
    '_disabled_loggers',
    default=frozenset(),
)


class LoggingConfig:
    """
    Process wide logging settings.

    Values live in context variables, so every ``LoggingConfig`` instance
    reads the same settings and tasks inherit whatever was set before they
    were created.
    """

    def update(
        self,
        log_directory: str | None = None,
        log_level: LogLevelName | None = None,
        log_output: LogOutput | None = None,
    ):
        if log_directory:
            _log_directory.set(log_directory)

        if log_level:
            _log_level.set(LogLevel.to_level(log_level))

        if log_output:
            _log_output.set(StreamType(log_output))

    def disable(self, logger_name: str | None = None):
        if logger_name is None:
            _logging_disabled.set(True)

        else:
            _disabled_loggers.set(_disabled_loggers.get() | {logger_name})

    def enable(self):
        _logging_disabled.set(False)

    def enabled(self, logger_name: str, log_level: LogLevel) -> bool:
        if _logging_disabled.get() or logger_name in _disabled_loggers.get():
            return False

        return log_level.rank >= _log_level.get().rank

    @property
    def disabled(self) -> bool:
        return _logging_disabled.get()

    @property
    def level(self) -> LogLevel:
        return _log_level.get()

    @property
    def output(self) -> StreamType:
        return _log_output.get()

    @property
    def directory(self) -> str | None:
        return _log_directory.get()
