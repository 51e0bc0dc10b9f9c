from .remote_channel import (
    RemoteChannel as RemoteChannel,
    RemoteSession as RemoteSession,
)
from .ssh_channel import (
    SSHChannel as SSHChannel,
    SSHSession as SSHSession,
)
