import inspect
from typing import Any, Callable, Generic, Literal, TypeVar

from .positional_arg import parse_value, to_value_types, type_name


KeywordArgType = Literal[
    "keyword",
    "flag"
]


T = TypeVar('T')


class KeywordArg(Generic[T]):

    def __init__(
        self,
        name: str,
        data_type: type[T],
        short_name: str | None = None,
        default: T | Callable[[], T] | None = None,
        required: bool = True,
        arg_type: KeywordArgType = 'keyword',
        description: str | None = None
    ):
        if short_name is None:
            short_name = name[:1]

        self.name = name
        self.short_name = short_name

        self.full_flag = f'--{name.replace("_", "-")}'
        self.short_flag = f'-{short_name}'

        self.value_type = to_value_types(data_type)
        self.required = required

        self.default = default
        self.arg_type: KeywordArgType = arg_type
        self._data_type = [
            type_name(subtype) for subtype in self.value_type
        ]

        self.description = description

    @property
    def data_type(self):
        return ', '.join(self._data_type)

    def to_help_string(
        self,
        descriptor: str | None = None
    ):
        
        if descriptor is None:
            descriptor = self.description

        arg_type = 'flag' if self.arg_type == 'flag' else self.data_type

        help_string = f'{self.full_flag}/{self.short_flag}: [{arg_type}]'

        if descriptor:
            help_string = f'{help_string} {descriptor}'

        return help_string

    async def parse(self, value: str):
        return await parse_value(
            self.name,
            self.value_type,
            value,
        )

    async def parse_default(self):
        default = self.default

        if callable(default):
            default = default()

        if inspect.isawaitable(default):
            default = await default

        if isinstance(default, str):
            return await self.parse(default)

        return default
