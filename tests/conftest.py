import itertools
import socket

import pytest
import websockets
from websockets.protocol import State


class FakeConnection:
    """Stands in for a server connection: state, address and an async send."""

    _ports = itertools.count(50000)

    def __init__(self, name, state=State.OPEN):
        self.name = name
        self.state = state
        self.remote_address = ('127.0.0.1', next(self._ports))
        self.received = []

    async def send(self, message):
        if self.state is not State.OPEN:
            raise websockets.ConnectionClosedError(None, None)
        self.received.append(message)

    def __repr__(self):
        return f'<FakeConnection {self.name}>'


@pytest.fixture
def connection():
    return FakeConnection


def free_ports(count):
    socks = []
    try:
        for _ in range(count):
            sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
            sock.bind(('127.0.0.1', 0))
            socks.append(sock)
        return [s.getsockname()[1] for s in socks]
    finally:
        for sock in socks:
            sock.close()


@pytest.fixture
def ports():
    return free_ports
