"""Live membership of one connection group."""
import logging

from ws_echo.config import Group

logger = logging.getLogger(__name__)


class Registry:
    """
    The set of open connections belonging to a group.

    Only the owning listener's session handlers call add() and remove();
    the relay reads it through snapshot() so a connection closing while a
    message is being fanned out never invalidates the iteration.
    """

    def __init__(self, group: Group):
        self.group = group
        self._members = set()

    def add(self, connection):
        if connection in self._members:
            return
        self._members.add(connection)
        logger.debug('%s group: %d connected', self.group.value, len(self._members))

    def remove(self, connection):
        if connection not in self._members:
            return
        self._members.discard(connection)
        logger.debug('%s group: %d connected', self.group.value, len(self._members))

    def snapshot(self) -> tuple:
        return tuple(self._members)

    def __len__(self):
        return len(self._members)

    def __contains__(self, connection):
        return connection in self._members

    def __repr__(self):
        return f'<Registry {self.group.value} ({len(self._members)} connected)>'
