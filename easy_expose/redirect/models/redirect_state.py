from enum import Enum


class RedirectState(Enum):
    CONNECTING = "CONNECTING"
    INSTALLING = "INSTALLING"
    MONITORING = "MONITORING"
    FAILED = "FAILED"
    CANCELLING = "CANCELLING"
    TERMINATED = "TERMINATED"
