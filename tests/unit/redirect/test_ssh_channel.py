import asyncio
import pathlib

import pytest

from easy_expose.redirect import (
    CancellationToken,
    ForwardingSpec,
    L4Mode,
    LocalTarget,
    RedirectController,
    RedirectSupervisor,
    RemoteConnectionError,
    RemoteHost,
    SSHChannel,
    SupervisorExit,
)
from easy_expose.reliability import RetryConfig

from tests.conftest import FakeSession, wait_for


class TestConnectionOptions:

    def test_defaults_accept_any_host_key(self) -> None:
        channel = SSHChannel()
        options = channel._connection_options(RemoteHost(destination="edge.example.com"))

        assert options == {"known_hosts": None}

    def test_destination_and_identity(self) -> None:
        channel = SSHChannel(connect_timeout=5.0)
        options = channel._connection_options(
            RemoteHost(
                destination="deploy@edge.example.com:2222",
                identity=pathlib.Path("/keys/id_ed25519"),
            )
        )

        assert options["username"] == "deploy"
        assert options["port"] == 2222
        assert options["client_keys"] == ["/keys/id_ed25519"]
        assert options["connect_timeout"] == 5.0

    def test_strict_uses_default_known_hosts(self) -> None:
        channel = SSHChannel(known_hosts="strict")
        options = channel._connection_options(RemoteHost(destination="edge.example.com"))

        assert "known_hosts" not in options

    def test_known_hosts_path(self) -> None:
        channel = SSHChannel(known_hosts="/etc/ssh/ssh_known_hosts")
        options = channel._connection_options(RemoteHost(destination="edge.example.com"))

        assert options["known_hosts"] == "/etc/ssh/ssh_known_hosts"


class TestConnect:

    @pytest.mark.asyncio
    async def test_refused_connection_is_wrapped(self) -> None:
        channel = SSHChannel(connect_timeout=2.0)

        with pytest.raises(RemoteConnectionError):
            await channel.connect(RemoteHost(destination="127.0.0.1:1"))

    @pytest.mark.asyncio
    async def test_unreadable_identity_is_a_connection_error(
        self,
        broken_identity: pathlib.Path,
    ) -> None:
        channel = SSHChannel(connect_timeout=1.0)

        with pytest.raises(RemoteConnectionError):
            await channel.connect(
                RemoteHost(
                    destination="127.0.0.1:1",
                    identity=broken_identity,
                )
            )

    @pytest.mark.asyncio
    async def test_supervisor_retries_unreadable_identity(
        self,
        broken_identity: pathlib.Path,
    ) -> None:
        spec = ForwardingSpec(
            identifier="test",
            protocol=L4Mode.TCP,
            remote_host=RemoteHost(
                destination="127.0.0.1:1",
                identity=broken_identity,
            ),
            remote_port=9912,
            local_target=LocalTarget(address="100.82.95.116", port=9912),
        )

        supervisor = RedirectSupervisor(
            RedirectController(spec, SSHChannel(connect_timeout=1.0)),
            retry_config=RetryConfig(base_delay=0.01),
        )
        token = CancellationToken()

        run = asyncio.create_task(supervisor.run(token))
        await wait_for(lambda: len(supervisor.failures) >= 2, timeout=5.0)

        token.cancel()

        assert await run in (SupervisorExit.TERMINATED, SupervisorExit.CANCELLED)
        assert all(
            isinstance(failure, RemoteConnectionError) for failure in supervisor.failures
        )


class TestExecute:

    @pytest.mark.asyncio
    async def test_rejects_foreign_sessions(self) -> None:
        channel = SSHChannel()

        with pytest.raises(TypeError):
            await channel.execute(FakeSession(session_id=0), "nft", ("list", "tables"))
