from ws_echo.config import Group
from ws_echo.registry import Registry


def test_add_is_idempotent(connection):
    registry = Registry(Group.TARGET)
    conn = connection('a')
    registry.add(conn)
    registry.add(conn)
    assert len(registry) == 1
    assert conn in registry


def test_remove_absent_connection_is_noop(connection):
    registry = Registry(Group.TARGET)
    conn = connection('a')
    registry.remove(conn)
    registry.add(conn)
    registry.remove(conn)
    registry.remove(conn)
    assert len(registry) == 0
    assert conn not in registry


def test_snapshot_is_a_copy(connection):
    registry = Registry(Group.SOURCE)
    a, b = connection('a'), connection('b')
    registry.add(a)
    registry.add(b)

    snap = registry.snapshot()
    registry.remove(a)
    registry.add(connection('c'))

    assert set(snap) == {a, b}
    assert len(registry) == 2


def test_repr_mentions_group_and_size(connection):
    registry = Registry(Group.SOURCE)
    registry.add(connection('a'))
    assert repr(registry) == '<Registry input (1 connected)>'
