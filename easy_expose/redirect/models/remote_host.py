from __future__ import annotations

import pathlib
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, StrictStr, field_validator


class RemoteHost(BaseModel):
    model_config = ConfigDict(frozen=True)

    destination: StrictStr
    identity: pathlib.Path | None = None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, destination: str):
        parse_destination(destination)
        return destination

    @property
    def username(self) -> str | None:
        return parse_destination(self.destination)[0]

    @property
    def host(self) -> str:
        return parse_destination(self.destination)[1]

    @property
    def port(self) -> int | None:
        return parse_destination(self.destination)[2]

    def __str__(self):
        return self.destination


def parse_destination(destination: str) -> tuple[str | None, str, int | None]:
    """
    Split an SSH destination into (username, host, port).

    Accepts ``[user@]host[:port]`` and ``ssh://[user@]host[:port]``. A bare
    host containing more than one colon is taken as an IPv6 literal.
    """
    destination = destination.strip()
    if len(destination) == 0:
        raise ValueError("Err. - destination cannot be empty")

    if destination.startswith("ssh://"):
        parsed = urlparse(destination)
        if not parsed.hostname:
            raise ValueError(f"Err. - no host found in destination {destination}")

        return (
            parsed.username,
            parsed.hostname,
            parsed.port,
        )

    username: str | None = None
    host = destination
    port: int | None = None

    if "@" in host:
        username, host = host.rsplit("@", maxsplit=1)

    if host.startswith("[") and "]" in host:
        host, _, port_text = host[1:].partition("]")
        if port_text:
            port = _parse_port(port_text.lstrip(":"), destination)

    elif host.count(":") == 1:
        host, port_text = host.split(":")
        port = _parse_port(port_text, destination)

    if len(host) == 0 or (username is not None and len(username) == 0):
        raise ValueError(f"Err. - invalid destination {destination}")

    return (
        username,
        host,
        port,
    )


def _parse_port(port_text: str, destination: str):
    try:
        port = int(port_text)

    except ValueError:
        raise ValueError(f"Err. - invalid port in destination {destination}")

    if port < 1 or port > 65535:
        raise ValueError(f"Err. - port out of range in destination {destination}")

    return port
