import msgspec


class CommandResult(msgspec.Struct, frozen=True):
    exit_status: int
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def success(self) -> bool:
        return self.exit_status == 0

    @property
    def error_text(self) -> str:
        return self.stderr.decode(errors="replace").strip()
