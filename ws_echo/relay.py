"""
Fan-out of inbound messages from the input group to the output group.

In shared mode (input port == output port) both groups are the same registry
and a message goes to every other client, never back to its sender.
"""
import asyncio
import logging

import websockets
from websockets.protocol import State

from ws_echo.config import RelayMode
from ws_echo.registry import Registry

logger = logging.getLogger(__name__)

PREVIEW_CHARS = 100


def client_id(connection) -> str:
    addr = connection.remote_address
    if not addr:
        return '?'
    return f'{addr[0]}:{addr[1]}'


def preview(message) -> str:
    if isinstance(message, (bytes, bytearray, memoryview)):
        return f'<{len(message)} bytes>'
    if len(message) > PREVIEW_CHARS:
        return message[:PREVIEW_CHARS] + '...'
    return message


class Relay:
    def __init__(self, mode: RelayMode, source: Registry, target: Registry):
        if mode is RelayMode.SHARED_GROUP and source is not target:
            raise ValueError('shared mode needs a single registry for both groups')
        if mode is RelayMode.SEPARATE_GROUPS and source is target:
            raise ValueError('separate mode needs distinct source and target registries')
        self.mode = mode
        self.source = source
        self.target = target
        self.forwarded = 0
        self.failed = 0
        # strong refs so in-flight sends are not garbage collected
        self._pending = set()

    def forward(self, sender, message) -> int:
        """
        Send ``message`` unmodified to every open member of the target group.

        Sends are scheduled, not awaited: nothing here suspends, so the
        membership seen by the loop is exactly the snapshot taken on entry.
        Returns the number of sends issued; ``forwarded`` counts those that
        completed.
        """
        skip_sender = self.mode is RelayMode.SHARED_GROUP
        count = 0
        for member in self.target.snapshot():
            if skip_sender and member is sender:
                continue
            if member.state is not State.OPEN:
                continue
            self._dispatch(member, message)
            count += 1
        logger.info('Forwarded message to %d output client(s)', count)
        return count

    def _dispatch(self, member, message):
        task = asyncio.create_task(member.send(message))
        self._pending.add(task)
        task.add_done_callback(lambda t: self._sent(member, t))

    def _sent(self, member, task):
        self._pending.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            self.forwarded += 1
            return
        self.failed += 1
        if isinstance(exc, websockets.ConnectionClosed):
            # its own session removes it from the registry
            logger.debug('Dropped message to %s: connection closed', client_id(member))
        else:
            logger.warning('Failed to forward message to %s: %r', client_id(member), exc)

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def flush(self, timeout=None):
        """Wait for in-flight sends to finish, at most ``timeout`` seconds."""
        if not self._pending:
            return
        await asyncio.wait(set(self._pending), timeout=timeout)

    async def serve_source(self, ws):
        """Session for a client of the input group."""
        addr = client_id(ws)
        self.source.add(ws)
        try:
            async for message in ws:
                logger.info('Received message from %s: %s', addr, preview(message))
                self.forward(ws, message)
        except websockets.ConnectionClosedError as exc:
            logger.warning('%s client error for %s: %s', self.source.group.value.capitalize(), addr, exc)
        finally:
            self.source.remove(ws)

    async def serve_target(self, ws):
        """
        Session for a client of the output group (separate mode only).

        Inbound messages are read and dropped; reading is what notices the
        close frame.
        """
        addr = client_id(ws)
        self.target.add(ws)
        try:
            async for message in ws:
                logger.debug('Ignoring message from %s client %s: %s',
                             self.target.group.value, addr, preview(message))
        except websockets.ConnectionClosedError as exc:
            logger.warning('%s client error for %s: %s', self.target.group.value.capitalize(), addr, exc)
        finally:
            self.target.remove(ws)
