import asyncio
import pathlib
from typing import Literal

import asyncssh
from pydantic import ValidationError

from easy_expose.env import Env, load_env
from easy_expose.logging import Logger, LoggingConfig, LogLevelName
from easy_expose.logging.easy_expose_logging_models import StartupFatal
from easy_expose.redirect import (
    CancellationToken,
    ConfigurationError,
    ForwardingSpec,
    IdentityError,
    L4Mode,
    RedirectController,
    RedirectSupervisor,
    RemoteHost,
    SSHChannel,
    StartupError,
    install_signal_handlers,
    remove_signal_handlers,
    resolve_local_target,
)
from easy_expose.redirect.models import validate_identifier
from easy_expose.reliability import RetryConfig

from .cli import CLI, AssertSet


def load_settings(env_file: str | None = None) -> Env:
    try:
        return load_env(Env, env_file=env_file)

    except ValidationError as err:
        raise ConfigurationError(f"Err. - invalid configuration: {err}") from err


async def check_identity(identity: str) -> pathlib.Path:
    identity_path = pathlib.Path(identity).expanduser()
    loop = asyncio.get_running_loop()

    try:
        await loop.run_in_executor(
            None,
            asyncssh.read_private_key,
            identity_path,
        )

    except (
        asyncssh.KeyImportError,
        OSError,
    ) as err:
        raise IdentityError(
            f"Err. - could not load identity {identity_path}: {err}"
        ) from err

    return identity_path


async def create_spec(
    identifier: str,
    mode: L4Mode,
    destination: str,
    remote: int,
    local: str,
    identity: str | None = None,
):
    validate_identifier(identifier)

    identity_path: pathlib.Path | None = None
    if identity:
        identity_path = await check_identity(identity)

    local_target = await resolve_local_target(local)

    return ForwardingSpec(
        identifier=identifier,
        protocol=mode,
        remote_host=RemoteHost(
            destination=destination,
            identity=identity_path,
        ),
        remote_port=remote,
        local_target=local_target,
    )


@CLI.root()
async def easy_expose(
    identifier: str,
    mode: AssertSet[Literal["udp", "tcp"]],
    destination: str,
    remote: int,
    local: str,
    identity: str | None = None,
    log_level: AssertSet[LogLevelName] | None = None,
    env_file: str | None = None,
):
    """
    Forward a port on a remote host to a local address using nftables over SSH.

    @param identifier Name of the nftables table to manage on the remote host
    @param mode Protocol to forward
    @param destination SSH destination as [user@]host[:port] or ssh://[user@]host[:port]
    @param remote Port on the remote host to forward
    @param local Address to forward to as <ip/hostname>:<port>
    @param identity Path to an SSH private key
    @param log_level Logging level
    @param env_file Path to a .env file
    """
    logger = Logger()
    logger.configure(
        name="startup",
        template="{timestamp} - {level} - {command} - {message}",
        models={
            "fatal": (
                StartupFatal,
                {"command": "easy-expose"},
            ),
        },
    )

    signals = []

    try:
        env = load_settings(env_file)

        LoggingConfig().update(
            log_directory=env.EASY_EXPOSE_LOGS_DIRECTORY,
            log_level=log_level.data if log_level else env.EASY_EXPOSE_LOG_LEVEL,
            log_output=env.EASY_EXPOSE_LOG_OUTPUT,
        )

        spec = await create_spec(
            identifier,
            L4Mode(mode.data),
            destination,
            remote,
            local,
            identity=identity,
        )

        token = CancellationToken()
        signals = install_signal_handlers(token)

        controller = RedirectController(
            spec,
            SSHChannel(
                connect_timeout=env.connect_timeout,
                known_hosts=env.EASY_EXPOSE_KNOWN_HOSTS,
            ),
            poll_interval=env.poll_interval,
            nft_command=env.EASY_EXPOSE_NFT_COMMAND,
            logger=logger,
        )

        supervisor = RedirectSupervisor(
            controller,
            retry_config=RetryConfig.from_env(env),
            logger=logger,
        )

        await supervisor.run(token)

        return 0

    except (StartupError, ValidationError) as err:
        async with logger.context(name="startup", nested=True) as ctx:
            await ctx.log_prepared(
                f"Could not start - {err}",
                name="fatal",
            )

        return 1

    finally:
        remove_signal_handlers(signals)
        await logger.close()
