import asyncio
import ipaddress
import socket

from .errors import ResolutionError
from .models import LocalTarget


def split_host_port(local: str) -> tuple[str, int]:
    """Split ``<ip/hostname>:<port>`` or ``[<ipv6>]:<port>``."""
    local = local.strip()

    if local.startswith("["):
        host, separator, port_text = local[1:].partition("]:")
        if not separator:
            raise ResolutionError(f"Err. - {local} is not in [<ipv6>]:<port> format")

    else:
        host, separator, port_text = local.rpartition(":")
        if not separator:
            raise ResolutionError(f"Err. - {local} is not in <ip/hostname>:<port> format")

    if len(host) == 0:
        raise ResolutionError(f"Err. - no host found in {local}")

    try:
        port = int(port_text)

    except ValueError:
        raise ResolutionError(f"Err. - {port_text} is not a valid port")

    if port < 0 or port > 65535:
        raise ResolutionError(f"Err. - port {port} is out of range")

    return (
        host,
        port,
    )


async def resolve_local_target(local: str) -> LocalTarget:
    """
    Resolve the forwarding target to exactly one concrete address. The first
    address returned by the resolver is used.
    """
    host, port = split_host_port(local)
    loop = asyncio.get_running_loop()

    try:
        results = await loop.getaddrinfo(
            host,
            port,
            type=socket.SOCK_STREAM,
        )

    except (socket.gaierror, UnicodeError) as err:
        raise ResolutionError(f"Err. - could not resolve {host}: {err}") from err

    if len(results) == 0:
        raise ResolutionError(f"Err. - {host} resolved to no addresses")

    _, _, _, _, sockaddr = results[0]
    address = ipaddress.ip_address(
        sockaddr[0].split("%")[0]
    )

    return LocalTarget(
        address=address,
        port=port,
    )
