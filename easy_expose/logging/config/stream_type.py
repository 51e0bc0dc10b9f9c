from enum import Enum
from typing import Literal


LogOutput = Literal['stdout', 'stderr']


class StreamType(Enum):
    STDOUT = 'stdout'
    STDERR = 'stderr'
