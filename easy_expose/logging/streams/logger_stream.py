import asyncio
import os
import pathlib
import sys
from typing import Any, BinaryIO, TypeVar

import msgspec

from easy_expose.logging.config import LoggingConfig, StreamType
from easy_expose.logging.models import Entry, Log, LogLevel

T = TypeVar('T', bound=Entry)

ModelConfig = dict[str, tuple[type[Entry], dict[str, Any]]]


DEFAULT_TEMPLATE = "{timestamp} - {level} - {filename}:{function_name}.{line_number} - {message}"
DEFAULT_LOGFILE = "easy_expose.log.json"


class LoggerStream:
    """
    Formats entries for one named logger.

    Every entry the config lets through is written as a templated line to
    stdout or stderr. When a log directory is configured, or the stream was
    given a filename, the entry is also appended to a JSON lines file.
    """

    def __init__(
        self,
        name: str | None = None,
        template: str | None = None,
        filename: str | None = None,
        directory: str | None = None,
        models: ModelConfig | None = None,
    ) -> None:
        if name is None:
            name = 'default'

        if template is None:
            template = DEFAULT_TEMPLATE

        self.name = name
        self.template = template
        self.filename = filename
        self.directory = directory

        self._config = LoggingConfig()
        self._loop: asyncio.AbstractEventLoop | None = None

        self._logfile: BinaryIO | None = None
        self._logfile_path: str | None = None
        self._file_lock = asyncio.Lock()

        self._models: ModelConfig = {
            'default': (
                Entry,
                {'level': LogLevel.INFO},
            )
        }

        if models:
            self.update_models(models)

    def update_models(self, models: ModelConfig):
        for model_name, config in models.items():
            if model_name != 'default':
                self._models[model_name] = config

    async def initialize(self):
        if self._loop is None:
            self._loop = asyncio.get_running_loop()

    async def log_prepared(
        self,
        message: str,
        name: str = 'default',
    ):
        model, defaults = self._models.get(name, self._models['default'])

        await self.log(
            Log.from_caller(
                model(
                    message=message,
                    **defaults,
                ),
            ),
        )

    async def log(
        self,
        entry: T | Log[T],
    ):
        if not isinstance(entry, Log):
            entry = Log.from_caller(entry)

        if self._config.enabled(self.name, entry.entry.level) is False:
            return

        await self.initialize()

        line = entry.entry.to_template(
            self.template,
            context=entry.context,
        )

        await self._loop.run_in_executor(
            None,
            self._write_to_stream,
            self._config.output,
            line,
        )

        if logfile_path := self._to_logfile_path():
            await self._write_to_file(entry, logfile_path)

    async def close(self):
        if self._loop is None or self._logfile is None:
            return

        async with self._file_lock:
            await self._loop.run_in_executor(
                None,
                self._logfile.close,
            )

            self._logfile = None
            self._logfile_path = None

    def _to_logfile_path(self) -> str | None:
        directory = self.directory or self._config.directory

        if self.filename is None and directory is None:
            return None

        filename = pathlib.Path(self.filename or DEFAULT_LOGFILE)

        assert (
            filename.suffix == ".json"
        ), "Err. - file must be JSON file for logs."

        return os.path.join(directory or os.getcwd(), filename)

    def _write_to_stream(
        self,
        stream_type: StreamType,
        line: str,
    ):
        stream = sys.stdout if stream_type == StreamType.STDOUT else sys.stderr

        if stream is None or stream.closed:
            return

        stream.write(f'{line}\n')
        stream.flush()

    async def _write_to_file(self, log: Log, logfile_path: str):
        async with self._file_lock:
            await self._loop.run_in_executor(
                None,
                self._append,
                msgspec.json.encode(log) + b"\n",
                logfile_path,
            )

    def _append(self, data: bytes, logfile_path: str):
        if self._logfile is None or self._logfile_path != logfile_path:
            if self._logfile:
                self._logfile.close()

            resolved_path = pathlib.Path(logfile_path).absolute()
            resolved_path.parent.mkdir(parents=True, exist_ok=True)

            self._logfile = open(resolved_path, "ab")
            self._logfile_path = logfile_path

        self._logfile.write(data)
        self._logfile.flush()
