from .arg_types import AssertSet as AssertSet
from .cli import CLI as CLI
from .command import Command as Command
from .command import create_command as create_command
from .keyword_arg import KeywordArg as KeywordArg
from .positional_arg import PositionalArg as PositionalArg
