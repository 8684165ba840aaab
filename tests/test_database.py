"""Tests for the SQLAlchemy-backed key-value store."""

from securepass.database import DatabaseManager, KeyValueStore


class TestKeyValueStore:
    def test_missing_key(self, store: KeyValueStore) -> None:
        assert store.get("gatepasses") is None

    def test_set_overwrites(self, store: KeyValueStore) -> None:
        store.set("currentUser", '{"id": "1"}')
        store.set("currentUser", '{"id": "2"}')
        assert store.get("currentUser") == '{"id": "2"}'

    def test_delete(self, store: KeyValueStore) -> None:
        store.set("currentUser", "x")
        store.delete("currentUser")
        store.delete("currentUser")
        assert store.get("currentUser") is None

    def test_file_database_survives_new_engine(self, tmp_path) -> None:
        url = f"sqlite:///{tmp_path / 'kv.db'}"
        first = DatabaseManager(url)
        KeyValueStore(first).set("registeredUsers", "[]")
        first.dispose()

        second = DatabaseManager(url)
        assert KeyValueStore(second).get("registeredUsers") == "[]"
        second.dispose()
