import pytest

from pong.models import PaddleSlot
from pong.services.match import CapacityExceeded, UnknownSession
from pong.services.match.registry import SessionRegistry


@pytest.fixture()
def slots():
    return [PaddleSlot(0), PaddleSlot(1)]


@pytest.fixture()
def registry(slots):
    return SessionRegistry(slots)


def test_connect_binds_slots_in_order(registry, slots):
    assert registry.connect('a') == 0
    assert registry.connect('b') == 1
    assert [s.sid for s in slots] == ['a', 'b']
    assert registry.live_count == 2
    assert registry.bound_count == 2


def test_third_session_is_spectator(registry):
    registry.connect('a')
    registry.connect('b')
    with pytest.raises(CapacityExceeded):
        registry.connect('c')
    assert registry.is_live('c')
    assert registry.live_count == 3
    assert registry.resolve_slot('c') is None


def test_reconnecting_same_sid_is_not_double_counted(registry):
    registry.connect('a')
    assert registry.connect('a') == 0
    assert registry.live_count == 1


def test_resolve_unknown_session(registry):
    with pytest.raises(UnknownSession):
        registry.resolve_slot('ghost')


def test_disconnect_unknown_session(registry):
    with pytest.raises(UnknownSession):
        registry.disconnect('ghost')


def test_disconnect_promotes_in_join_order(registry, slots):
    registry.connect('a')
    registry.connect('b')
    with pytest.raises(CapacityExceeded):
        registry.connect('c')
    released, rebound = registry.disconnect('a')
    assert released == 0
    assert rebound == [0, 1]
    assert [s.sid for s in slots] == ['b', 'c']
    assert registry.sessions == ['b', 'c']


def test_disconnect_last_player_frees_slot(registry, slots):
    registry.connect('a')
    registry.connect('b')
    released, rebound = registry.disconnect('b')
    assert released == 1
    assert rebound == [1]
    assert slots[1].sid is None
    # Next newcomer takes the free slot
    assert registry.connect('c') == 1


def test_spectator_leaving_changes_no_binding(registry):
    registry.connect('a')
    registry.connect('b')
    with pytest.raises(CapacityExceeded):
        registry.connect('c')
    released, rebound = registry.disconnect('c')
    assert released is None
    assert rebound == []
