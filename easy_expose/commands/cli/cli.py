import sys

from .command import Command, create_command


class CLI:
    _entrypoint: Command | None = None
    _usage_exit_code: int = 1

    @classmethod
    async def run(cls, args: list[str] | None = None) -> int:
        if args is None:
            args = sys.argv[1:]

        if cls._entrypoint is None:
            raise RuntimeError("Err. - no root command registered")

        (
            result,
            errors,
        ) = await cls._entrypoint.run(args)

        if len(errors) > 0:
            return cls._usage_exit_code

        if isinstance(result, int):
            return result

        return 0

    @classmethod
    def root(
        cls,
        shortnames: dict[str, str] | None = None,
        usage_exit_code: int = 1,
    ):
        if shortnames is None:
            shortnames = {}

        def wrap(command_call):
            cls._entrypoint = create_command(
                command_call,
                shortnames=shortnames,
            )
            cls._usage_exit_code = usage_exit_code

            return cls._entrypoint

        return wrap
