from __future__ import annotations

import abc

from easy_expose.redirect.models import CommandResult, RemoteHost


class RemoteSession(abc.ABC):
    """
    A connection to the remote host owned by exactly one lifecycle phase.

    Sessions are closed when the phase that opened them ends and are never
    handed to another phase.
    """

    @property
    @abc.abstractmethod
    def closed(self) -> bool: ...

    @abc.abstractmethod
    async def close(self) -> None: ...

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


class RemoteChannel(abc.ABC):

    @abc.abstractmethod
    async def connect(self, remote_host: RemoteHost) -> RemoteSession:
        """
        Open a new session. Raises RemoteConnectionError on network or
        authentication failure.
        """

    @abc.abstractmethod
    async def execute(
        self,
        session: RemoteSession,
        command: str,
        args: tuple[str, ...] | list[str] = (),
        stdin: bytes | None = None,
    ) -> CommandResult:
        """
        Run a command in ``session``. A non-zero exit status is returned, not
        raised. Raises RemoteExecutionError only when the transport fails.
        """
