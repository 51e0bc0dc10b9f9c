from __future__ import annotations

import asyncio
import shlex
from typing import Any

import asyncssh

from easy_expose.redirect.errors import RemoteConnectionError, RemoteExecutionError
from easy_expose.redirect.models import CommandResult, RemoteHost

from .remote_channel import RemoteChannel, RemoteSession


class SSHSession(RemoteSession):

    def __init__(self, connection: asyncssh.SSHClientConnection):
        self.connection = connection
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def close(self):
        if self._closed:
            return

        self._closed = True
        self.connection.close()

        try:
            await self.connection.wait_closed()

        except (asyncssh.Error, OSError):
            pass


class SSHChannel(RemoteChannel):

    def __init__(
        self,
        connect_timeout: float | None = None,
        known_hosts: str = "accept",
    ):
        self.connect_timeout = connect_timeout
        self.known_hosts = known_hosts

    def _connection_options(self, remote_host: RemoteHost) -> dict[str, Any]:
        options: dict[str, Any] = {}

        if remote_host.port is not None:
            options["port"] = remote_host.port

        if remote_host.username is not None:
            options["username"] = remote_host.username

        if remote_host.identity is not None:
            options["client_keys"] = [str(remote_host.identity)]

        if self.known_hosts == "accept":
            options["known_hosts"] = None

        elif self.known_hosts != "strict":
            options["known_hosts"] = self.known_hosts

        if self.connect_timeout:
            options["connect_timeout"] = self.connect_timeout

        return options

    async def connect(self, remote_host: RemoteHost) -> SSHSession:
        try:
            connection = await asyncssh.connect(
                remote_host.host,
                **self._connection_options(remote_host),
            )

        except (
            asyncssh.Error,
            asyncssh.KeyImportError,
            OSError,
            asyncio.TimeoutError,
        ) as err:
            raise RemoteConnectionError(
                f"Could not connect to {remote_host.destination}: {err}"
            ) from err

        return SSHSession(connection)

    async def execute(
        self,
        session: RemoteSession,
        command: str,
        args: tuple[str, ...] | list[str] = (),
        stdin: bytes | None = None,
    ) -> CommandResult:
        if not isinstance(session, SSHSession):
            raise TypeError(
                f"Err. - SSHChannel requires an SSHSession, got {type(session).__name__}"
            )

        if session.closed:
            raise RemoteExecutionError("Err. - session is closed")

        command_line = shlex.join([command, *args])

        try:
            result = await session.connection.run(
                command_line,
                input=stdin,
                check=False,
                encoding=None,
            )

        except (
            asyncssh.Error,
            OSError,
        ) as err:
            raise RemoteExecutionError(
                f"Running {command_line} failed: {err}"
            ) from err

        exit_status = result.returncode if result.returncode is not None else -1

        return CommandResult(
            exit_status=exit_status,
            stdout=result.stdout or b"",
            stderr=result.stderr or b"",
        )
