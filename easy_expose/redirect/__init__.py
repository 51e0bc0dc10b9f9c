from .cancellation import (
    CancellationToken as CancellationToken,
    install_signal_handlers as install_signal_handlers,
    race as race,
    remove_signal_handlers as remove_signal_handlers,
)
from .channel import (
    RemoteChannel as RemoteChannel,
    RemoteSession as RemoteSession,
    SSHChannel as SSHChannel,
)
from .controller import RedirectController as RedirectController
from .errors import (
    CheckError as CheckError,
    CleanupError as CleanupError,
    ConfigurationError as ConfigurationError,
    IdentityError as IdentityError,
    InstallError as InstallError,
    InvalidIdentifierError as InvalidIdentifierError,
    RedirectError as RedirectError,
    RemoteConnectionError as RemoteConnectionError,
    RemoteExecutionError as RemoteExecutionError,
    ResolutionError as ResolutionError,
    StartupError as StartupError,
)
from .models import (
    CommandResult as CommandResult,
    ForwardingSpec as ForwardingSpec,
    L4Mode as L4Mode,
    LocalTarget as LocalTarget,
    RedirectState as RedirectState,
    RemoteHost as RemoteHost,
)
from .resolve import resolve_local_target as resolve_local_target
from .rule_template import generate as generate
from .supervisor import (
    RedirectSupervisor as RedirectSupervisor,
    SupervisorExit as SupervisorExit,
)
