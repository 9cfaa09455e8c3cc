from registry import RoomRegistry


def test_ensure_creates_empty_room_once():
    registry = RoomRegistry()
    room = registry.ensure("room1")
    assert room.room_id == "room1"
    assert room.members == set()
    assert room.snapshot is None
    assert not room.has_snapshot
    assert registry.ensure("room1") is room
    assert len(registry) == 1


def test_get_does_not_create():
    registry = RoomRegistry()
    assert registry.get("missing") is None
    assert "missing" not in registry
    assert len(registry) == 0


def test_remove_if_empty_only_removes_empty_rooms():
    registry = RoomRegistry()
    room = registry.ensure("room1")
    room.members.add("session-a")
    assert registry.remove_if_empty("room1") is False
    assert "room1" in registry

    room.members.discard("session-a")
    assert registry.remove_if_empty("room1") is True
    assert registry.get("room1") is None


def test_remove_if_empty_on_unknown_room_is_noop():
    registry = RoomRegistry()
    assert registry.remove_if_empty("nope") is False


def test_rooms_do_not_share_snapshots():
    registry = RoomRegistry()
    registry.ensure("a").snapshot = {"version": "1", "objects": [], "background": "red"}
    assert registry.ensure("b").snapshot is None
    assert sorted(registry.room_ids()) == ["a", "b"]
