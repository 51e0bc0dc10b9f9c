import datetime
import sys
import threading
from typing import Generic, TypeVar

import msgspec

from .entry import Entry


T = TypeVar('T', bound=Entry)


def utc_timestamp() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


class Log(msgspec.Struct, Generic[T], kw_only=True):
    entry: T
    filename: str
    function_name: str
    line_number: int
    thread_id: int = msgspec.field(default_factory=threading.get_native_id)
    timestamp: str = msgspec.field(default_factory=utc_timestamp)

    @classmethod
    def from_caller(cls, entry: T, depth: int = 1):
        """Wrap ``entry`` with the source location ``depth`` frames above the caller."""
        frame = sys._getframe(depth + 1)

        return cls(
            entry=entry,
            filename=frame.f_code.co_filename,
            function_name=frame.f_code.co_name,
            line_number=frame.f_lineno,
        )

    @property
    def context(self):
        return {
            'filename': self.filename,
            'function_name': self.function_name,
            'line_number': self.line_number,
            'thread_id': self.thread_id,
            'timestamp': self.timestamp,
        }
