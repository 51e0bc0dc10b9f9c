from .root import run as run
