from __future__ import annotations

from typing import Callable, Dict, Literal, Union

from pydantic import BaseModel, StrictStr, field_validator

from easy_expose.logging import LogLevelName

from .time_parser import TimeParser

PrimaryType = Union[str, int, float, bytes, bool]


class Env(BaseModel):
    EASY_EXPOSE_POLL_INTERVAL: StrictStr = "1m"
    EASY_EXPOSE_RETRY_DELAY: StrictStr = "10s"
    EASY_EXPOSE_RETRY_MAX_DELAY: StrictStr = "10m"
    EASY_EXPOSE_RETRY_BACKOFF: Literal["fixed", "exponential"] = "fixed"
    EASY_EXPOSE_RETRY_JITTER: Literal["none", "full", "equal"] = "none"
    EASY_EXPOSE_CONNECT_TIMEOUT: StrictStr = "30s"
    EASY_EXPOSE_KNOWN_HOSTS: StrictStr = "accept"
    EASY_EXPOSE_NFT_COMMAND: StrictStr = "nft"
    EASY_EXPOSE_LOG_LEVEL: LogLevelName = "info"
    EASY_EXPOSE_LOG_OUTPUT: Literal["stdout", "stderr"] = "stderr"
    EASY_EXPOSE_LOGS_DIRECTORY: StrictStr | None = None

    @field_validator(
        "EASY_EXPOSE_POLL_INTERVAL",
        "EASY_EXPOSE_RETRY_DELAY",
        "EASY_EXPOSE_RETRY_MAX_DELAY",
        "EASY_EXPOSE_CONNECT_TIMEOUT",
    )
    @classmethod
    def validate_duration(cls, time_amount: str):
        if TimeParser(time_amount).time <= 0:
            raise ValueError(f"Err. - {time_amount} must be longer than zero")

        return time_amount

    @classmethod
    def types_map(cls) -> Dict[str, Callable[[str], PrimaryType]]:
        return {
            "EASY_EXPOSE_POLL_INTERVAL": str,
            "EASY_EXPOSE_RETRY_DELAY": str,
            "EASY_EXPOSE_RETRY_MAX_DELAY": str,
            "EASY_EXPOSE_RETRY_BACKOFF": str,
            "EASY_EXPOSE_RETRY_JITTER": str,
            "EASY_EXPOSE_CONNECT_TIMEOUT": str,
            "EASY_EXPOSE_KNOWN_HOSTS": str,
            "EASY_EXPOSE_NFT_COMMAND": str,
            "EASY_EXPOSE_LOG_LEVEL": str,
            "EASY_EXPOSE_LOG_OUTPUT": str,
            "EASY_EXPOSE_LOGS_DIRECTORY": str,
        }

    @property
    def poll_interval(self) -> float:
        return TimeParser(self.EASY_EXPOSE_POLL_INTERVAL).time

    @property
    def retry_delay(self) -> float:
        return TimeParser(self.EASY_EXPOSE_RETRY_DELAY).time

    @property
    def retry_max_delay(self) -> float:
        return TimeParser(self.EASY_EXPOSE_RETRY_MAX_DELAY).time

    @property
    def connect_timeout(self) -> float:
        return TimeParser(self.EASY_EXPOSE_CONNECT_TIMEOUT).time
