import inspect
from types import NoneType, UnionType
from typing import Any, Callable, Union, get_args, get_origin

from .help_message import create_help_string, parse_docstring
from .keyword_arg import KeywordArg, KeywordArgType
from .positional_arg import PositionalArg


def assemble_expanded_args(args: list[str]):
    cli_args: list[str] = []

    for arg in args:
        if arg.startswith("--"):
            cli_args.append(arg)

        elif arg.startswith("-") and len(arg) > 1:
            expanded_args = [f"-{short_arg}" for short_arg in list(arg.strip("-"))]

            cli_args.extend(expanded_args)

        else:
            cli_args.append(arg)

    return cli_args


def inspect_wrapped(
    command_call: Callable[..., Any],
    shortnames: dict[str, str] | None = None,
    indentation: int | None = None,
):
    if shortnames is None:
        shortnames = {}

    if indentation is None:
        indentation = 0

    description, param_descriptions = parse_docstring(command_call.__doc__)
    call_args = inspect.signature(command_call)

    positional_args_map: dict[int, PositionalArg] = {}
    keyword_args_map: dict[str, KeywordArg] = {}

    position_index: int = 0

    for arg_name, arg_attrs in call_args.parameters.items():

        if arg_attrs.annotation == inspect.Parameter.empty:
            raise Exception(
                f"Err. - cannot use unannotated arg {arg_name} for command signature"
            )

        elif arg_attrs.default == inspect.Parameter.empty:
            positional_args_map[position_index] = PositionalArg(
                arg_name,
                position_index,
                arg_attrs.annotation,
                description=param_descriptions.get(arg_name),
            )

            position_index += 1

        else:
            arg_type: KeywordArgType = "keyword"
            arg_default = arg_attrs.default
            if isinstance(arg_attrs.default, bool) or arg_attrs.annotation is bool:
                arg_type = "flag"

            if arg_type == "flag" and arg_attrs.default is None:
                arg_default = False

            args_types = [arg_attrs.annotation]
            if get_origin(arg_attrs.annotation) in [Union, UnionType]:
                args_types = list(get_args(arg_attrs.annotation))

            none_allowed = NoneType in args_types
            required = arg_attrs.default is None and none_allowed is False

            keyword_arg = KeywordArg(
                arg_name,
                arg_attrs.annotation,
                short_name=shortnames.get(arg_name),
                required=required,
                default=arg_default,
                arg_type=arg_type,
                description=param_descriptions.get(arg_name),
            )

            keyword_args_map[keyword_arg.full_flag] = keyword_arg
            keyword_args_map[keyword_arg.short_flag] = keyword_arg

    help_arg = KeywordArg(
        "help",
        bool,
        required=False,
        description="Display the help message and exit.",
        arg_type="flag",
    )

    keyword_args_map.update(
        {
            help_arg.full_flag: help_arg,
            help_arg.short_flag: help_arg,
        }
    )

    help_message = create_help_string(
        command_call.__name__,
        description,
        positional_args_map,
        keyword_args_map,
        indentation=indentation,
    )

    return (
        positional_args_map,
        keyword_args_map,
        help_message,
    )
