import asyncio

from easy_expose.logging import Logger
from easy_expose.logging.easy_expose_logging_models import (
    RedirectDebug,
    RedirectFailure,
    RedirectInfo,
    RedirectTrace,
    RedirectWarn,
)

from .cancellation import CancellationToken, race
from .channel import RemoteChannel, RemoteSession
from .errors import (
    CheckError,
    CleanupError,
    InstallError,
    RedirectError,
    RemoteExecutionError,
)
from .models import ForwardingSpec, RedirectState
from .rule_template import (
    apply_command,
    check_command,
    delete_command,
    generate,
)


class RedirectController:
    """
    Drives one redirect lifecycle attempt at a time.

    An attempt connects, installs the rule and then checks it every
    ``poll_interval`` seconds until a step fails or the cancellation token is
    set. Failures are raised to the caller. Cancellation opens a new session,
    deletes the rule and ends the controller in ``TERMINATED``; that cleanup
    happens at most once per controller.
    """

    def __init__(
        self,
        spec: ForwardingSpec,
        channel: RemoteChannel,
        poll_interval: float = 60.0,
        nft_command: str = "nft",
        logger: Logger | None = None,
    ) -> None:
        if logger is None:
            logger = Logger()

        self.spec = spec
        self.state: RedirectState | None = None
        self.installed: bool = False

        self._channel = channel
        self._poll_interval = poll_interval
        self._nft_command = nft_command
        self._rule = generate(spec)
        self._terminated = False

        default_config = {
            "identifier": spec.identifier,
            "destination": spec.remote_host.destination,
        }

        self._logger = logger
        self._logger.configure(
            name="redirect",
            template="{timestamp} - {level} - {identifier}@{destination} - {message}",
            models={
                "trace": (RedirectTrace, default_config),
                "debug": (RedirectDebug, default_config),
                "info": (RedirectInfo, default_config),
                "warn": (RedirectWarn, default_config),
                "error": (RedirectFailure, default_config),
            },
        )

    @property
    def logger(self):
        return self._logger

    @property
    def rule(self):
        return self._rule

    @property
    def terminated(self):
        return self._terminated

    async def run_attempt(self, token: CancellationToken) -> RedirectState:
        if self._terminated:
            return RedirectState.TERMINATED

        self.installed = False

        cancelled, _ = await race(
            self._connect_install_monitor(),
            token,
        )

        if cancelled:
            return await self._cleanup()

        # The monitoring loop only ends by raising.
        raise CheckError("Err. - monitoring stopped without a failure")

    async def _connect_install_monitor(self):
        try:
            await self._transition(RedirectState.CONNECTING)
            session = await self._channel.connect(self.spec.remote_host)

            async with session:
                await self._transition(RedirectState.INSTALLING)
                await self._install(session)

                await self._transition(RedirectState.MONITORING)
                await self._monitor(session)

        except RedirectError as err:
            await self._transition(
                RedirectState.FAILED,
                reason=f"{err.__class__.__name__}: {err}",
            )
            raise

    async def _install(self, session: RemoteSession):
        command = apply_command(self._nft_command)

        async with self._logger.context(name="redirect", nested=True) as ctx:
            await ctx.log_prepared(
                f"Installing rule:\n{self._rule}",
                name="debug",
            )

        try:
            result = await self._channel.execute(
                session,
                command.command,
                command.args,
                stdin=self._rule.encode(),
            )

        except RemoteExecutionError as err:
            raise InstallError(f"Installing redirect failed: {err}") from err

        if not result.success:
            raise InstallError(f"Installing redirect failed: {result.error_text}")

        self.installed = True

        async with self._logger.context(name="redirect", nested=True) as ctx:
            await ctx.log_prepared(
                f"Forwarding {self.spec.protocol.keyword} port {self.spec.remote_port} to {self.spec.local_target}",
                name="info",
            )

    async def _monitor(self, session: RemoteSession):
        command = check_command(
            self.spec,
            nft_command=self._nft_command,
        )

        while True:
            await asyncio.sleep(self._poll_interval)

            async with self._logger.context(name="redirect", nested=True) as ctx:
                await ctx.log_prepared(
                    f"Checking table {self.spec.identifier}",
                    name="trace",
                )

            try:
                result = await self._channel.execute(
                    session,
                    command.command,
                    command.args,
                )

            except RemoteExecutionError as err:
                raise CheckError(f"Checking rule failed: {err}") from err

            if not result.success:
                raise CheckError(
                    f"Rule got dropped: table {self.spec.identifier} not found"
                )

    async def _cleanup(self) -> RedirectState:
        self._terminated = True
        await self._transition(RedirectState.CANCELLING)

        command = delete_command(
            self.spec,
            nft_command=self._nft_command,
        )

        try:
            session = await self._channel.connect(self.spec.remote_host)

            async with session:
                result = await self._channel.execute(
                    session,
                    command.command,
                    command.args,
                )

            if not result.success:
                raise CleanupError(
                    f"Deleting table {self.spec.identifier} exited with status {result.exit_status}: {result.error_text}"
                )

            async with self._logger.context(name="redirect", nested=True) as ctx:
                await ctx.log_prepared(
                    f"Deleted table {self.spec.identifier}",
                    name="info",
                )

        except RedirectError as err:
            async with self._logger.context(name="redirect", nested=True) as ctx:
                await ctx.log_prepared(
                    f"Cleanup failed - {err.__class__.__name__}: {err}",
                    name="warn",
                )

        await self._transition(RedirectState.TERMINATED)

        return RedirectState.TERMINATED

    async def _transition(
        self,
        state: RedirectState,
        reason: str | None = None,
    ):
        self.state = state

        message = f"State {state.value}"
        if reason:
            message = f"{message} - {reason}"

        async with self._logger.context(name="redirect", nested=True) as ctx:
            await ctx.log_prepared(
                message,
                name="debug",
            )
