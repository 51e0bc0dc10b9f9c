import asyncio
import signal
from typing import Awaitable, Iterable, TypeVar

from .errors import StartupError

T = TypeVar("T")


SHUTDOWN_SIGNALS = (
    signal.SIGINT,
    signal.SIGTERM,
)


class CancellationToken:
    """
    One-shot process shutdown flag.

    Set at most once, never reset. Passed explicitly to every routine that
    has to stop when the process is asked to.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self):
        self._event.set()

    async def wait(self):
        await self._event.wait()


def install_signal_handlers(
    token: CancellationToken,
    loop: asyncio.AbstractEventLoop | None = None,
    signals: Iterable[signal.Signals] = SHUTDOWN_SIGNALS,
):
    if loop is None:
        loop = asyncio.get_running_loop()

    installed: list[signal.Signals] = []

    try:
        for sig in signals:
            loop.add_signal_handler(sig, token.cancel)
            installed.append(sig)

    except (
        NotImplementedError,
        RuntimeError,
        ValueError,
    ) as err:
        for sig in installed:
            loop.remove_signal_handler(sig)

        raise StartupError(
            f"Err. - could not install shutdown signal handlers: {err}"
        ) from err

    return installed


def remove_signal_handlers(
    signals: Iterable[signal.Signals],
    loop: asyncio.AbstractEventLoop | None = None,
):
    if loop is None:
        loop = asyncio.get_running_loop()

    for sig in signals:
        loop.remove_signal_handler(sig)


async def race(
    operation: Awaitable[T],
    token: CancellationToken,
) -> tuple[bool, T | None]:
    """
    Run ``operation`` until it finishes or ``token`` is set, whichever comes
    first.

    Returns ``(True, None)`` if cancellation won, otherwise ``(False, result)``.
    An exception raised by ``operation`` propagates. The losing branch is
    cancelled and awaited before returning, so anything it holds open
    (sessions, sleeps) is released. When both finish together cancellation
    wins.
    """
    operation_task = asyncio.ensure_future(operation)
    cancellation_task = asyncio.ensure_future(token.wait())

    try:
        await asyncio.wait(
            [
                operation_task,
                cancellation_task,
            ],
            return_when=asyncio.FIRST_COMPLETED,
        )

    except asyncio.CancelledError:
        await _abandon(operation_task, cancellation_task)
        raise

    if token.cancelled:
        await _abandon(operation_task, cancellation_task)
        return (
            True,
            None,
        )

    await _abandon(cancellation_task)

    return (
        False,
        operation_task.result(),
    )


async def _abandon(*tasks: asyncio.Future):
    for task in tasks:
        if not task.done():
            task.cancel()

    await asyncio.gather(*tasks, return_exceptions=True)
