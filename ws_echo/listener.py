"""WebSocket endpoint accepting clients for one group on path '/'."""
import logging
import socket
from http import HTTPStatus

from websockets.asyncio.server import serve

from ws_echo.errors import BindError
from ws_echo.relay import client_id

logger = logging.getLogger(__name__)

MAX_PORT = 65535


def only_root_path(connection, request):
    path = request.path.split('?')[0]
    if path != '/':
        return connection.respond(HTTPStatus.NOT_FOUND, 'Not found\n')
    return None


class Listener:
    """
    Owns one bound ``websockets`` server.

    Every accepted connection is handed to ``handler`` (a coroutine taking
    the connection), bracketed by connect/disconnect log lines.
    """

    def __init__(self, handler, name):
        self.handler = handler
        self.name = name
        self._server = None

    @classmethod
    async def bind(cls, port: int, handler, host='0.0.0.0', name='input') -> 'Listener':
        if not 0 <= port <= MAX_PORT:
            raise BindError(port, f'port must be between 0 and {MAX_PORT}')
        listener = cls(handler, name)
        try:
            listener._server = await serve(listener._session, host, port,
                                           process_request=only_root_path)
        except (OSError, OverflowError) as exc:
            raise BindError(port, exc) from exc
        logger.info('%s server listening on port(s) %s', name.capitalize(),
                    ', '.join(str(p) for p in listener.ports))
        return listener

    @property
    def ports(self) -> tuple:
        """Distinct bound ports; port 0 on a dual-stack host can give one per family."""
        return tuple(sorted({s.getsockname()[1] for s in self._server.sockets}))

    @property
    def port(self) -> int:
        sockets = self._server.sockets
        for sock in sockets:
            if sock.family == socket.AF_INET:
                return sock.getsockname()[1]
        return sockets[0].getsockname()[1]

    async def _session(self, ws):
        addr = client_id(ws)
        logger.info('%s client connected: %s', self.name.capitalize(), addr)
        try:
            await self.handler(ws)
        finally:
            logger.info('%s client disconnected: %s', self.name.capitalize(), addr)

    def close(self, close_connections=False):
        """Stop accepting clients. Open connections are left alone unless asked."""
        self._server.close(close_connections=close_connections)

    async def wait_closed(self):
        await self._server.wait_closed()
        logger.info('%s server closed', self.name.capitalize())
