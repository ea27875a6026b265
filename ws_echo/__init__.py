"""
WebSocket relay: forwards every message received on an input port to all
clients connected on an output port, or echoes to the other clients when both
ports are the same.
"""
from ws_echo.config import Config, Group, RelayMode
from ws_echo.errors import BindError, RelayError
from ws_echo.listener import Listener
from ws_echo.registry import Registry
from ws_echo.relay import Relay
from ws_echo.server import RelayServer, run, start

__version__ = '0.3.0'

__all__ = [
    'BindError',
    'Config',
    'Group',
    'Listener',
    'Registry',
    'Relay',
    'RelayError',
    'RelayMode',
    'RelayServer',
    'run',
    'start',
]
