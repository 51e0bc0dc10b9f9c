import asyncio
import sys

from .cli import CLI
from .expose import easy_expose as easy_expose


def run():
    try:
        exit_code = asyncio.run(CLI.run(args=sys.argv[1:]))

    except KeyboardInterrupt:
        exit_code = 130

    sys.exit(exit_code)
