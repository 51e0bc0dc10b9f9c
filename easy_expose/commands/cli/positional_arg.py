from types import NoneType, UnionType
from typing import Any, Generic, TypeVar, Union, get_args, get_origin

from .arg_types import AssertSet


T = TypeVar('T')


def to_value_types(data_type: Any) -> tuple[Any, ...]:
    if get_origin(data_type) is AssertSet:
        return tuple([data_type])

    if get_origin(data_type) in [Union, UnionType]:
        return tuple([
            subtype for subtype in get_args(data_type) if subtype is not NoneType
        ])

    return tuple([data_type])


async def parse_value(
    name: str,
    value_types: tuple[Any, ...],
    value: str,
):
    parse_error: Exception | None = None

    for subtype in value_types:
        try:
            if get_origin(subtype) is AssertSet:
                assert_set = AssertSet(name, subtype)
                return await assert_set.parse(value)

            elif subtype is bytes:
                return bytes(value, encoding='utf-8')

            else:
                return subtype(value)

        except Exception as e:
            parse_error = e

    return parse_error


def type_name(subtype: Any):
    if get_origin(subtype) is AssertSet:
        return AssertSet(
            'help',
            subtype,
        ).data_type

    return getattr(subtype, '__name__', str(subtype))


class PositionalArg(Generic[T]):

    def __init__(
        self,
        name: str,
        index: int,
        data_type: type[T],
        description: str | None = None,
    ):
        self.name = name
        self.index = index
        self.value_type = to_value_types(data_type)
        self.description = description

        self._data_type = [
            type_name(subtype) for subtype in self.value_type
        ]

    @property
    def data_type(self):
        return ', '.join(self._data_type)

    def to_help_string(self):

        help_string = f'{self.name}: [{self.data_type}]'

        if self.description:
            help_string = f'{help_string} {self.description}'

        return help_string

    async def parse(self, value: str):
        return await parse_value(
            self.name,
            self.value_type,
            value,
        )
