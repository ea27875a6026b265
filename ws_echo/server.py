"""
Wiring of listeners, registries and the relay, plus signal-driven shutdown.

  input port  -- clients whose messages are forwarded
  output port -- clients that receive them
  same port   -- one listener; messages are echoed to the other clients
"""
import asyncio
import logging
import signal

from ws_echo.config import Config, Group, RelayMode
from ws_echo.errors import BindError
from ws_echo.listener import Listener
from ws_echo.registry import Registry
from ws_echo.relay import Relay

logger = logging.getLogger(__name__)

DRAIN_TIMEOUT = 1.0
STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class RelayServer:
    def __init__(self, relay: Relay, listeners):
        self.relay = relay
        self.listeners = listeners

    @property
    def port_in(self) -> int:
        return self.listeners[0].port

    @property
    def port_out(self) -> int:
        return self.listeners[-1].port

    async def shutdown(self, drain_timeout=DRAIN_TIMEOUT):
        """Stop accepting clients and give in-flight sends a moment to finish."""
        for listener in self.listeners:
            listener.close()
        # the listeners close from their own tasks; let them run first
        await asyncio.sleep(0)
        await self.relay.flush(timeout=drain_timeout)
        if self.relay.pending:
            logger.warning('%d message(s) still in flight at shutdown', self.relay.pending)

    async def wait_closed(self):
        for listener in self.listeners:
            await listener.wait_closed()


async def start(config: Config) -> RelayServer:
    """Bind the listener(s) for ``config``; raises BindError if any port fails."""
    mode = config.mode
    source = Registry(Group.SOURCE)
    target = source if mode is RelayMode.SHARED_GROUP else Registry(Group.TARGET)
    relay = Relay(mode, source, target)

    listeners = []
    try:
        listeners.append(await Listener.bind(config.port_in, relay.serve_source,
                                             host=config.host, name=Group.SOURCE.value))
        if mode is RelayMode.SEPARATE_GROUPS:
            listeners.append(await Listener.bind(config.port_out, relay.serve_target,
                                                 host=config.host, name=Group.TARGET.value))
    except BindError:
        for listener in listeners:
            listener.close(close_connections=True)
            await listener.wait_closed()
        raise
    return RelayServer(relay, listeners)


def log_banner(server: RelayServer):
    logger.info('Input port: %s', ', '.join(str(p) for p in server.listeners[0].ports))
    logger.info('Output port: %s', ', '.join(str(p) for p in server.listeners[-1].ports))
    logger.info('Connect input clients to:  ws://localhost:%d', server.port_in)
    if server.relay.mode is RelayMode.SEPARATE_GROUPS:
        logger.info('Connect output clients to: ws://localhost:%d', server.port_out)
    else:
        logger.info('Same port mode: messages will be echoed to other clients on the same port')
    logger.info('Ready to forward messages! Press Ctrl+C to stop.')


async def run(config: Config) -> int:
    """Serve until SIGINT/SIGTERM. Returns the process exit status."""
    logger.info('Starting ws-echo...')
    try:
        server = await start(config)
    except BindError as exc:
        logger.error('%s', exc)
        return 1
    log_banner(server)

    loop = asyncio.get_running_loop()
    stop = asyncio.Event()

    def request_stop(sig):
        logger.info('Received %s, shutting down ws-echo...', sig.name)
        stop.set()

    installed = []
    for sig in STOP_SIGNALS:
        try:
            loop.add_signal_handler(sig, request_stop, sig)
        except NotImplementedError:
            # no loop signal support (Windows); Ctrl+C arrives as KeyboardInterrupt
            continue
        installed.append(sig)

    try:
        await stop.wait()
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)
        await server.shutdown()
    logger.info('Forwarded %d message(s), %d failed', server.relay.forwarded, server.relay.failed)
    return 0
