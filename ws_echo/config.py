"""Runtime settings, resolved once at startup."""
import enum
from dataclasses import dataclass

DEFAULT_PORT_IN = 8080
DEFAULT_PORT_OUT = 8081
DEFAULT_HOST = '0.0.0.0'


class Group(enum.Enum):
    SOURCE = 'input'
    TARGET = 'output'


class RelayMode(enum.Enum):
    SEPARATE_GROUPS = 'separate'
    # input and output share one port, one listener and one registry
    SHARED_GROUP = 'shared'


@dataclass(frozen=True)
class Config:
    port_in: int = DEFAULT_PORT_IN
    port_out: int = DEFAULT_PORT_OUT
    host: str = DEFAULT_HOST
    verbose: bool = False

    @property
    def mode(self) -> RelayMode:
        if self.port_in == self.port_out:
            return RelayMode.SHARED_GROUP
        return RelayMode.SEPARATE_GROUPS
