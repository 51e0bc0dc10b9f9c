import asyncio
from typing import TypeVar

from easy_expose.logging.models import Entry, Log

from .logger_context import LoggerContext
from .logger_stream import ModelConfig

T = TypeVar('T', bound=Entry)


class Logger:
    def __init__(self) -> None:
        self._contexts: dict[str, LoggerContext] = {}

    def configure(
        self,
        name: str | None = None,
        template: str | None = None,
        filename: str | None = None,
        directory: str | None = None,
        models: ModelConfig | None = None,
    ):
        """Register a long lived context, replacing any context of the same name."""
        if name is None:
            name = 'default'

        self._contexts[name] = LoggerContext(
            name=name,
            template=template,
            filename=filename,
            directory=directory,
            nested=True,
            models=models,
        )

        return self._contexts[name]

    def context(
        self,
        name: str | None = None,
        template: str | None = None,
        nested: bool = False,
        models: ModelConfig | None = None,
    ):
        if name is None:
            name = 'default'

        context = self._contexts.get(name)

        if context is None:
            context = LoggerContext(
                name=name,
                template=template,
                nested=nested,
                models=models,
            )

            self._contexts[name] = context

        else:
            if template:
                context.stream.template = template

            if models:
                context.stream.update_models(models)

            context.nested = nested or context.nested

        return context

    async def log(
        self,
        entry: T,
        name: str | None = None,
    ):
        async with self.context(name=name, nested=True) as stream:
            await stream.log(
                Log.from_caller(entry),
            )

    async def close(self):
        await asyncio.gather(*[
            context.stream.close() for context in self._contexts.values()
        ])

