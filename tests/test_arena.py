"""Tests for inodekit.arena."""

from inodekit.arena import Arena


class TestArena:
    def test_allocate_returns_value(self) -> None:
        arena = Arena()
        value = ["x"]
        assert arena.allocate(value, "list") is value
        assert len(arena) == 1

    def test_tag_counts(self) -> None:
        arena = Arena()
        arena.allocate("a", "paths")
        arena.allocate("b", "paths")
        arena.allocate(1)
        assert arena.tag_counts() == {"paths": 2, "": 1}

    def test_reset_releases_everything(self) -> None:
        arena = Arena()
        for i in range(5):
            arena.allocate(i, "n")
        arena.reset()
        assert len(arena) == 0
        assert arena.tag_counts() == {}

    def test_context_manager_resets_on_exit(self) -> None:
        with Arena("scope") as arena:
            arena.allocate("p")
            assert len(arena) == 1
        assert len(arena) == 0
