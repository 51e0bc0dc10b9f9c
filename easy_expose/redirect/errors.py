class RedirectError(Exception):
    """Base class for failures the supervisor retries."""


class RemoteConnectionError(RedirectError, ConnectionError):
    pass


class RemoteExecutionError(RedirectError):
    pass


class InstallError(RedirectError):
    pass


class CheckError(RedirectError):
    pass


class CleanupError(RedirectError):
    pass


class StartupError(Exception):
    """Raised before the supervisor runs. Never retried."""


class InvalidIdentifierError(StartupError, ValueError):
    pass


class ResolutionError(StartupError):
    pass


class IdentityError(StartupError):
    pass


class ConfigurationError(StartupError):
    pass
