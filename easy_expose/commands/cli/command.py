from __future__ import annotations

import asyncio
import sys
import textwrap
from typing import Any, Callable, Generic, Literal, TypeVar

from .inspect_wrapped import assemble_expanded_args, inspect_wrapped
from .keyword_arg import KeywordArg
from .positional_arg import PositionalArg

T = TypeVar('T', bound=Callable[..., Any])


ArgType = Literal['positional', 'keyword']


def create_command(
    command_call: Callable[..., Any],
    shortnames: dict[str, str] | None = None,
):
    (
        positional_args_map,
        keyword_args_map,
        help_message,
    ) = inspect_wrapped(
        command_call,
        shortnames=shortnames,
    )

    return Command(
        command_call.__name__,
        command_call,
        help_message,
        positional_args=positional_args_map,
        keyword_args_map=keyword_args_map,
    )


class Command(Generic[T]):

    def __init__(
        self,
        command: str,
        callable: T,
        help_message: str,
        positional_args: dict[int, PositionalArg] | None = None,
        keyword_args_map: dict[str, KeywordArg] | None = None,
    ):
        if positional_args is None:
            positional_args = {}

        if keyword_args_map is None:
            keyword_args_map = {}

        self.command_name = command
        self._command_call: T = callable

        self.help_message = help_message

        self.positional_args = positional_args
        self.keyword_args_map = keyword_args_map
        self.positional_args_count = len(positional_args)

    @property
    def source(self):
        if self._command_call:
            return self._command_call.__module__

    async def run(self, args: list[str]) -> tuple[Any | None, list[str]]:
        (
            positional_args,
            keyword_args,
            errors,
        ) = await self._find_args(args)

        if positional_args is None and keyword_args is None:
            await self._write(f'{self.help_message}\n\n')

            return (
                None,
                errors,
            )

        elif len(errors) > 0:
            await self._write(
                '\n'.join([
                    f'error: {errors[0]}',
                    '',
                    self.help_message,
                    '',
                    '',
                ])
            )

            return (
                None,
                errors,
            )

        result = await self._command_call(*positional_args, **keyword_args)

        return (
            result,
            errors,
        )

    async def _write(self, message: str):
        loop = asyncio.get_running_loop()

        await loop.run_in_executor(
            None,
            sys.stdout.write,
            message,
        )

    async def _find_args(self, args: list[str]):
        (
            positional_args,
            keyword_args,
            errors,
        ) = await self._assemble_positional_and_keyword_args(args)

        if keyword_args.get('help'):
            return (
                None,
                None,
                errors,
            )

        if len(positional_args) < self.positional_args_count:
            errors.extend([
                f'{positional_arg.name} argument is required'
                for idx, positional_arg in sorted(self.positional_args.items())
                if idx >= len(positional_args)
            ])

        keyword_configs = {
            config.name: config
            for flag, config in self.keyword_args_map.items()
            if flag == config.full_flag and config.name != 'help'
        }

        for name, config in keyword_configs.items():
            if name in keyword_args:
                continue

            if config.arg_type == 'flag':
                keyword_args[name] = bool(config.default)
                continue

            default = await config.parse_default()
            if isinstance(default, Exception):
                errors.append(
                    f'default for {config.full_flag} is invalid - {default}'
                )

            elif default is None and config.required:
                errors.append(f'{config.full_flag} option is required')

            else:
                keyword_args[name] = default

        return (
            positional_args,
            keyword_args,
            errors,
        )

    async def _assemble_positional_and_keyword_args(
        self,
        args: list[str],
    ):
        positional_args: list[Any] = []
        keyword_args: dict[str, Any] = {}
        consumed_idxs: set[int] = set()
        positional_idx = 0

        errors: list[str] = []

        cli_args = assemble_expanded_args(args)

        for idx, arg in enumerate(cli_args):

            if idx in consumed_idxs:
                continue

            error: str | None = None

            if (
                keyword_arg := self.keyword_args_map.get(arg)
            ):
                consumed_idxs.add(idx)
                (
                    value,
                    error,
                ) = await self._consume_keyword_value(
                    idx,
                    cli_args,
                    keyword_arg,
                    consumed_idxs,
                )

                if error is None:
                    keyword_args[keyword_arg.name] = value

            elif (
                positional_arg := self.positional_args.get(positional_idx)
            ):
                error = await self._consume_positional_value(
                    arg,
                    positional_arg,
                    positional_args,
                )

                positional_idx += 1
                consumed_idxs.add(idx)

            else:
                error = f'{arg} is not a recognized argument or option'

            if error:
                errors.append(error)

        return (
            positional_args,
            keyword_args,
            errors,
        )

    async def _consume_positional_value(
        self,
        arg: str,
        positional_arg: PositionalArg,
        positional_args: list[Any],
    ):
        value = await positional_arg.parse(arg)

        if isinstance(value, Exception):
            return f'{arg} is not a valid value {positional_arg.data_type} for argument {positional_arg.name}'

        positional_args.append(value)

    async def _consume_keyword_value(
        self,
        current_idx: int,
        args: list[str],
        keyword_arg: KeywordArg,
        consumed_idxs: set[int],
    ):
        if keyword_arg.arg_type == 'flag':
            return (
                True,
                None,
            )

        value_idx = current_idx + 1

        if value_idx >= len(args):
            return (
                None,
                f'No value found for option {keyword_arg.full_flag}',
            )

        consumed_idxs.add(value_idx)
        value = await keyword_arg.parse(args[value_idx])

        if isinstance(value, Exception):
            return (
                None,
                f'{args[value_idx]} is not a valid value {keyword_arg.data_type} for option {keyword_arg.full_flag}',
            )

        return (
            value,
            None,
        )
