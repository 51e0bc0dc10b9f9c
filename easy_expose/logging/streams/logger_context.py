from .logger_stream import LoggerStream, ModelConfig


class LoggerContext:
    """
    Async context handing out a named ``LoggerStream``.

    Nested contexts are long lived and keep their stream open across uses.
    Other contexts close the stream's log file when they exit.
    """

    def __init__(
        self,
        name: str | None = None,
        template: str | None = None,
        filename: str | None = None,
        directory: str | None = None,
        nested: bool = False,
        models: ModelConfig | None = None,
    ) -> None:
        self.name = name
        self.nested = nested
        self.stream = LoggerStream(
            name=name,
            template=template,
            filename=filename,
            directory=directory,
            models=models,
        )

    async def __aenter__(self):
        await self.stream.initialize()
        return self.stream

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.nested is False:
            await self.stream.close()
