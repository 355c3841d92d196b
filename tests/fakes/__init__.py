from tests.fakes.fake_tree_store import FakeTreeStore

__all__ = ["FakeTreeStore"]
