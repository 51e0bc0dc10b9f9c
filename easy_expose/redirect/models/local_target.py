from ipaddress import IPv4Address, IPv6Address
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

TableFamily = Literal["ip", "ip6"]


class LocalTarget(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: IPv4Address | IPv6Address
    port: int = Field(ge=0, le=65535)

    @property
    def family(self) -> TableFamily:
        return "ip6" if isinstance(self.address, IPv6Address) else "ip"

    def __str__(self):
        if isinstance(self.address, IPv6Address):
            return f"[{self.address}]:{self.port}"

        return f"{self.address}:{self.port}"
