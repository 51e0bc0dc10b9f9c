import re
import textwrap

from .keyword_arg import KeywordArg
from .positional_arg import PositionalArg


_param_pattern = re.compile(r"^\s*@param\s+(?P<name>\w+)\s+(?P<description>.+)$")


def parse_docstring(docstring: str | None) -> tuple[str, dict[str, str]]:
    if docstring is None:
        return (
            "No description found...",
            {},
        )

    description_lines: list[str] = []
    params: dict[str, str] = {}

    for line in textwrap.dedent(docstring).strip().splitlines():
        if match := _param_pattern.match(line):
            params[match.group("name")] = match.group("description").strip()

        else:
            description_lines.append(line)

    description = "\n".join(description_lines).strip()

    return (
        description if description else "No description found...",
        params,
    )


def create_help_string(
    command_name: str,
    description: str,
    positional_args_map: dict[int, PositionalArg],
    keyword_args_map: dict[str, KeywordArg],
    indentation: int = 0,
):
    options = [
        keyword_args_map[flag]
        for flag in sorted(keyword_args_map.keys())
        if flag == keyword_args_map[flag].full_flag
    ]

    positionals = [
        positional_args_map[idx] for idx in sorted(positional_args_map.keys())
    ]

    usage = " ".join([
        command_name.replace("_", "-"),
        *[arg.name.upper() for arg in positionals],
        *[f"[{option.full_flag}]" for option in options],
    ])

    lines: list[str] = [
        f"usage: {usage}",
        "",
        description,
    ]

    if len(positionals) > 0:
        lines.extend([
            "",
            "arguments:",
            *[textwrap.indent(arg.to_help_string(), "  ") for arg in positionals],
        ])

    lines.extend([
        "",
        "options:",
        *[textwrap.indent(option.to_help_string(), "  ") for option in options],
    ])

    return textwrap.indent("\n".join(lines), " " * indentation)
