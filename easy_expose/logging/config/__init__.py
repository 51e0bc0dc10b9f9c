from .logging_config import LoggingConfig as LoggingConfig
from .stream_type import (
    LogOutput as LogOutput,
    StreamType as StreamType,
)
