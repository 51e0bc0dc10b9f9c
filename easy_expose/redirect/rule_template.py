import msgspec

from .models import ForwardingSpec, validate_identifier


RULE_TEMPLATE = """
table {family} {identifier}
delete table {family} {identifier}
table {family} {identifier} {{
        chain prerouting {{
                type nat hook prerouting priority dstnat; policy accept;
                {mode} dport {remote_port} dnat to {local}
        }}

        chain postrouting {{
                type nat hook postrouting priority srcnat; policy accept;
                masquerade
        }}
}}
"""


class RemoteCommand(msgspec.Struct, frozen=True):
    command: str
    args: tuple[str, ...] = ()


def generate(spec: ForwardingSpec) -> str:
    """
    Render the nft program that installs the forwarding table for ``spec``.

    The program declares the table, deletes it and defines it again, so
    applying it to a host that already has the table replaces it instead of
    failing or duplicating rules.
    """
    identifier = validate_identifier(spec.identifier)

    return RULE_TEMPLATE.format(
        family=spec.local_target.family,
        identifier=identifier,
        mode=spec.protocol.keyword,
        remote_port=spec.remote_port,
        local=str(spec.local_target),
    )


def apply_command(nft_command: str = "nft"):
    return RemoteCommand(
        command=nft_command,
        args=("-f", "-"),
    )


def check_command(
    spec: ForwardingSpec,
    nft_command: str = "nft",
):
    return RemoteCommand(
        command=nft_command,
        args=(
            "list",
            "table",
            spec.local_target.family,
            validate_identifier(spec.identifier),
        ),
    )


def delete_command(
    spec: ForwardingSpec,
    nft_command: str = "nft",
):
    return RemoteCommand(
        command=nft_command,
        args=(
            "delete",
            "table",
            spec.local_target.family,
            validate_identifier(spec.identifier),
        ),
    )
