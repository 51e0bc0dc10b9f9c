from .command_result import CommandResult as CommandResult
from .forwarding_spec import (
    ForwardingSpec as ForwardingSpec,
    validate_identifier as validate_identifier,
)
from .l4_mode import L4Mode as L4Mode
from .local_target import (
    LocalTarget as LocalTarget,
    TableFamily as TableFamily,
)
from .redirect_state import RedirectState as RedirectState
from .remote_host import (
    RemoteHost as RemoteHost,
    parse_destination as parse_destination,
)
