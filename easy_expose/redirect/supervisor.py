import asyncio
from enum import Enum

from easy_expose.logging import Logger
from easy_expose.reliability import RetryConfig, calculate_delay

from .cancellation import CancellationToken, race
from .controller import RedirectController
from .errors import RedirectError


class SupervisorExit(Enum):
    TERMINATED = "TERMINATED"
    CANCELLED = "CANCELLED"


class RedirectSupervisor:
    """
    Runs controller attempts until one ends in cleanup or the process is
    cancelled between attempts.

    This is the only place a failed attempt is retried. After a failure the
    supervisor waits the retry delay, racing the wait against the
    cancellation token, and starts over from connecting.
    """

    def __init__(
        self,
        controller: RedirectController,
        retry_config: RetryConfig | None = None,
        logger: Logger | None = None,
    ) -> None:
        if retry_config is None:
            retry_config = RetryConfig()

        if logger is None:
            logger = controller.logger

        self.attempts: int = 0
        self.failures: list[RedirectError] = []

        self._controller = controller
        self._retry_config = retry_config
        self._logger = logger

    async def run(self, token: CancellationToken) -> SupervisorExit:
        consecutive_failures = 0

        while True:
            self.attempts += 1

            try:
                await self._controller.run_attempt(token)
                return SupervisorExit.TERMINATED

            except RedirectError as err:
                self.failures.append(err)

                if self._controller.installed:
                    consecutive_failures = 0

                delay = calculate_delay(
                    consecutive_failures,
                    self._retry_config,
                )
                consecutive_failures += 1

                async with self._logger.context(name="redirect", nested=True) as ctx:
                    await ctx.log_prepared(
                        f"Something broke - {err.__class__.__name__}: {err} - retrying in {delay:.1f} seconds",
                        name="error",
                    )

            if token.cancelled:
                return SupervisorExit.CANCELLED

            cancelled, _ = await race(
                asyncio.sleep(delay),
                token,
            )

            if cancelled:
                return SupervisorExit.CANCELLED
