from enum import Enum


class L4Mode(Enum):
    UDP = "udp"
    TCP = "tcp"

    @property
    def keyword(self) -> str:
        match self:
            case L4Mode.UDP:
                return "udp"
            case L4Mode.TCP:
                return "tcp"
