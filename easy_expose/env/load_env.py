import os
from typing import TypeVar

from dotenv import dotenv_values

from .env import Env, PrimaryType

T = TypeVar("T", bound=Env)


def load_env(
    default: type[T] = Env,
    env_file: str | None = None,
    override: T | None = None,
) -> T:
    """
    Build settings from the process environment, then ``env_file`` (``.env``
    in the working directory by default), then the fields explicitly set on
    ``override``. Later sources win. Unknown variables are ignored.
    """
    envars = default.types_map()

    if env_file is None:
        env_file = ".env"

    values: dict[str, PrimaryType] = {
        envar_name: envar_type(os.environ[envar_name])
        for envar_name, envar_type in envars.items()
        if os.environ.get(envar_name)
    }

    if os.path.isfile(env_file):
        values.update({
            envar_name: envars[envar_name](envar_value)
            for envar_name, envar_value in dotenv_values(dotenv_path=env_file).items()
            if envar_name in envars and envar_value
        })

    if override is not None:
        values.update(override.model_dump(exclude_unset=True))

    return default(**values)
