import asyncio

import pytest

from easy_expose.redirect import (
    CancellationToken,
    CheckError,
    ForwardingSpec,
    InstallError,
    RedirectController,
    RedirectState,
    RemoteConnectionError,
)

from tests.conftest import FakeChannel, FakeRemote, wait_for


def create_controller(
    spec: ForwardingSpec,
    channel: FakeChannel,
    poll_interval: float = 0.01,
):
    return RedirectController(
        spec,
        channel,
        poll_interval=poll_interval,
    )


class TestInstallThenCancel:
    """A healthy attempt installs, monitors, and cleans up on cancellation."""

    @pytest.mark.asyncio
    async def test_installs_rule_and_deletes_it_on_cancel(
        self,
        forwarding_spec: ForwardingSpec,
        fake_channel: FakeChannel,
        fake_remote: FakeRemote,
    ) -> None:
        controller = create_controller(forwarding_spec, fake_channel)
        token = CancellationToken()

        attempt = asyncio.create_task(controller.run_attempt(token))

        await wait_for(lambda: len(fake_channel.commands_for("list")) >= 2)
        assert ("ip", "test") in fake_remote.tables

        token.cancel()
        state = await attempt

        assert state == RedirectState.TERMINATED
        assert controller.state == RedirectState.TERMINATED
        assert ("ip", "test") not in fake_remote.tables

        deletes = fake_channel.commands_for("delete")
        assert len(deletes) == 1
        assert deletes[0].args == ("delete", "table", "ip", "test")

    @pytest.mark.asyncio
    async def test_applied_program_forwards_remote_port_to_local_target(
        self,
        forwarding_spec: ForwardingSpec,
        fake_channel: FakeChannel,
    ) -> None:
        controller = create_controller(forwarding_spec, fake_channel)
        token = CancellationToken()

        attempt = asyncio.create_task(controller.run_attempt(token))
        await wait_for(lambda: controller.state == RedirectState.MONITORING)

        token.cancel()
        await attempt

        applies = fake_channel.commands_for("apply")
        assert len(applies) == 1
        assert applies[0].command == "nft"
        assert "tcp dport 9912 dnat to 100.82.95.116:9912" in applies[0].stdin.decode()

    @pytest.mark.asyncio
    async def test_cleanup_uses_a_fresh_session(
        self,
        forwarding_spec: ForwardingSpec,
        fake_channel: FakeChannel,
    ) -> None:
        controller = create_controller(forwarding_spec, fake_channel)
        token = CancellationToken()

        attempt = asyncio.create_task(controller.run_attempt(token))
        await wait_for(lambda: controller.state == RedirectState.MONITORING)

        token.cancel()
        await attempt

        assert len(fake_channel.sessions) == 2
        assert all(session.closed for session in fake_channel.sessions)

        apply_session = fake_channel.commands_for("apply")[0].session_id
        delete_session = fake_channel.commands_for("delete")[0].session_id
        assert apply_session != delete_session

    @pytest.mark.asyncio
    async def test_cleanup_runs_once(
        self,
        forwarding_spec: ForwardingSpec,
        fake_channel: FakeChannel,
    ) -> None:
        controller = create_controller(forwarding_spec, fake_channel)
        token = CancellationToken()

        attempt = asyncio.create_task(controller.run_attempt(token))
        await wait_for(lambda: controller.state == RedirectState.MONITORING)

        token.cancel()
        await attempt

        commands_seen = len(fake_channel.commands)
        sessions_seen = len(fake_channel.sessions)

        assert await controller.run_attempt(token) == RedirectState.TERMINATED
        assert len(fake_channel.commands) == commands_seen
        assert len(fake_channel.sessions) == sessions_seen
        assert len(fake_channel.commands_for("delete")) == 1


class TestCancellationBeforeInstall:

    @pytest.mark.asyncio
    async def test_cancel_while_connecting_still_attempts_delete(
        self,
        forwarding_spec: ForwardingSpec,
        fake_channel: FakeChannel,
    ) -> None:
        fake_channel.connect_delay = 0.05
        controller = create_controller(forwarding_spec, fake_channel)
        token = CancellationToken()

        attempt = asyncio.create_task(controller.run_attempt(token))
        await wait_for(lambda: controller.state == RedirectState.CONNECTING)

        token.cancel()
        state = await attempt

        assert state == RedirectState.TERMINATED
        assert len(fake_channel.commands_for("apply")) == 0
        assert len(fake_channel.commands_for("delete")) == 1

    @pytest.mark.asyncio
    async def test_token_already_set_goes_straight_to_cleanup(
        self,
        forwarding_spec: ForwardingSpec,
        fake_channel: FakeChannel,
    ) -> None:
        controller = create_controller(forwarding_spec, fake_channel)
        token = CancellationToken()
        token.cancel()

        state = await controller.run_attempt(token)

        assert state == RedirectState.TERMINATED
        assert len(fake_channel.commands_for("delete")) == 1


class TestCleanupFailures:
    """Cleanup is best effort: failures are logged, never raised."""

    @pytest.mark.asyncio
    async def test_delete_failure_still_terminates(
        self,
        forwarding_spec: ForwardingSpec,
        fake_channel: FakeChannel,
    ) -> None:
        fake_channel.delete_exit_status = 1
        controller = create_controller(forwarding_spec, fake_channel)
        token = CancellationToken()

        attempt = asyncio.create_task(controller.run_attempt(token))
        await wait_for(lambda: controller.state == RedirectState.MONITORING)

        token.cancel()

        assert await attempt == RedirectState.TERMINATED
        assert len(fake_channel.commands_for("delete")) == 1

    @pytest.mark.asyncio
    async def test_connect_failure_during_cleanup_still_terminates(
        self,
        forwarding_spec: ForwardingSpec,
        fake_channel: FakeChannel,
    ) -> None:
        controller = create_controller(forwarding_spec, fake_channel)
        token = CancellationToken()

        attempt = asyncio.create_task(controller.run_attempt(token))
        await wait_for(lambda: controller.state == RedirectState.MONITORING)

        fake_channel.connect_failures = 1
        token.cancel()

        assert await attempt == RedirectState.TERMINATED
        assert len(fake_channel.commands_for("delete")) == 0


class TestAttemptFailures:

    @pytest.mark.asyncio
    async def test_connect_failure_is_raised(
        self,
        forwarding_spec: ForwardingSpec,
        fake_channel: FakeChannel,
    ) -> None:
        fake_channel.connect_failures = 1
        controller = create_controller(forwarding_spec, fake_channel)

        with pytest.raises(RemoteConnectionError):
            await controller.run_attempt(CancellationToken())

        assert controller.state == RedirectState.FAILED
        assert controller.installed is False

    @pytest.mark.asyncio
    async def test_install_failure_is_raised(
        self,
        forwarding_spec: ForwardingSpec,
        fake_channel: FakeChannel,
    ) -> None:
        fake_channel.install_exit_status = 1
        controller = create_controller(forwarding_spec, fake_channel)

        with pytest.raises(InstallError):
            await controller.run_attempt(CancellationToken())

        assert controller.state == RedirectState.FAILED
        assert all(session.closed for session in fake_channel.sessions)

    @pytest.mark.asyncio
    async def test_dropped_table_is_detected(
        self,
        forwarding_spec: ForwardingSpec,
        fake_channel: FakeChannel,
        fake_remote: FakeRemote,
    ) -> None:
        controller = create_controller(forwarding_spec, fake_channel)

        attempt = asyncio.create_task(controller.run_attempt(CancellationToken()))
        await wait_for(lambda: controller.state == RedirectState.MONITORING)

        fake_remote.tables.clear()

        with pytest.raises(CheckError, match="Rule got dropped"):
            await attempt

        assert controller.state == RedirectState.FAILED
        assert controller.installed is True
        assert len(fake_channel.commands_for("delete")) == 0

    @pytest.mark.asyncio
    async def test_check_transport_failure_is_a_check_error(
        self,
        forwarding_spec: ForwardingSpec,
        fake_channel: FakeChannel,
    ) -> None:
        fake_channel.check_transport_failure = True
        controller = create_controller(forwarding_spec, fake_channel)

        with pytest.raises(CheckError):
            await controller.run_attempt(CancellationToken())

    @pytest.mark.asyncio
    async def test_monitoring_waits_poll_interval_before_first_check(
        self,
        forwarding_spec: ForwardingSpec,
        fake_channel: FakeChannel,
    ) -> None:
        controller = create_controller(
            forwarding_spec,
            fake_channel,
            poll_interval=60.0,
        )
        token = CancellationToken()

        attempt = asyncio.create_task(controller.run_attempt(token))
        await wait_for(lambda: controller.state == RedirectState.MONITORING)
        await asyncio.sleep(0.05)

        assert len(fake_channel.commands_for("list")) == 0

        token.cancel()
        await attempt
