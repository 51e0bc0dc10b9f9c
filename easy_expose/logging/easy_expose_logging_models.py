from .models import Entry, LogLevel


class RedirectTrace(Entry, kw_only=True):
    identifier: str
    destination: str
    level: LogLevel = LogLevel.TRACE

class RedirectDebug(Entry, kw_only=True):
    identifier: str
    destination: str
    level: LogLevel = LogLevel.DEBUG

class RedirectInfo(Entry, kw_only=True):
    identifier: str
    destination: str
    level: LogLevel = LogLevel.INFO

class RedirectWarn(Entry, kw_only=True):
    identifier: str
    destination: str
    level: LogLevel = LogLevel.WARN

class RedirectFailure(Entry, kw_only=True):
    identifier: str
    destination: str
    level: LogLevel = LogLevel.ERROR

class StartupFatal(Entry, kw_only=True):
    command: str
    level: LogLevel = LogLevel.FATAL
