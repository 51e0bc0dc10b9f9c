from __future__ import annotations

from typing import Any, Generic, Literal, TypeVar, get_args, get_origin


T = TypeVar("T")


def reduce_assert_set_type(data_type: Any) -> list[Any]:
    options: list[Any] = []

    for subtype in get_args(data_type):
        if get_origin(subtype) is Literal:
            options.extend(get_args(subtype))

        else:
            options.append(subtype)

    return options


class AssertSet(Generic[T]):
    def __init__(self, name: str, data_type: AssertSet[T]):
        super().__init__()
        self.name = name
        self.data: T | None = None

        self._types: list[Any] = reduce_assert_set_type(data_type)
        self._data_types = [
            conversion_type.__name__
            if hasattr(conversion_type, "__name__")
            else str(conversion_type)
            for conversion_type in self._types
        ]

    def __contains__(self, value: Any):
        return value in self._types

    @property
    def data_type(self):
        return ", ".join(self._data_types)

    async def parse(self, arg: str | None = None):
        if arg is None:
            return Exception("no argument passed")

        if arg not in self._types:
            return Exception(
                f"{arg} is not a supported value for {self.name} - please pass one of {self.data_type}"
            )

        self.data = arg

        return self
