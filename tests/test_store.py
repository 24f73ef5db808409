"""Tests for the key/value and video stores."""
import pytest
from hypothesis import given
from hypothesis import strategies as st

from ora.intents import ConfigurationRecord
from ora.store import (
    LOCAL_REFERENCE_PREFIX,
    StoreKey,
    VideoBlob,
    create_key_value_store,
    create_video_store,
)
from ora.store.in_memory import InMemoryKeyValueStore

json_values = st.recursive(
    st.none() | st.booleans() | st.integers() | st.text(),
    lambda children: st.lists(children, max_size=4)
    | st.dictionaries(st.text(max_size=8), children, max_size=4),
    max_leaves=10,
)


class TestStoreFactory:
    """Tests for the store factories."""

    def test_create_memory_backends(self):
        """Test creating in-memory backends."""
        assert create_key_value_store("memory").backend_type == "memory"
        assert create_video_store("memory").backend_type == "memory"

    def test_create_sqlite_backends(self, sqlite_path):
        """Test creating SQLite backends."""
        assert create_key_value_store("sqlite", path=sqlite_path).backend_type == "sqlite"
        assert create_video_store("sqlite", path=sqlite_path).backend_type == "sqlite"

    def test_unsupported_backend(self):
        """Test that unknown backends raise ValueError."""
        with pytest.raises(ValueError, match="Unsupported store backend"):
            create_key_value_store("redis")
        with pytest.raises(ValueError, match="Supported backends"):
            create_video_store("s3")


class TestKeyValueStore:
    """Tests for the decoding and fail-open policy shared by all backends."""

    @pytest.mark.asyncio
    async def test_missing_key_returns_default(self, memory_store):
        """Test defaults for absent keys."""
        assert await memory_store.get("nothing") is None
        assert await memory_store.get("nothing", 5) == 5

    @pytest.mark.asyncio
    async def test_corrupt_json_reads_as_default(self):
        """Test that unreadable values fail open to the default."""
        store = InMemoryKeyValueStore({StoreKey.USER_TIER: "{not json"})
        assert await store.get(StoreKey.USER_TIER, "free") == "free"

    @pytest.mark.asyncio
    async def test_invalid_model_reads_as_default(self):
        """Test that a value of the wrong shape is ignored."""
        store = InMemoryKeyValueStore({StoreKey.CONFIGURED_NEWS_SOURCE: '{"name": 3}'})
        assert await store.get_model(StoreKey.CONFIGURED_NEWS_SOURCE, ConfigurationRecord) is None

    @pytest.mark.asyncio
    async def test_invalid_model_list_reads_as_empty(self):
        """Test that a corrupt list of models reads as empty."""
        store = InMemoryKeyValueStore({StoreKey.CONVERSATION_LOGS: '"oops"'})
        assert await store.get_model_list(StoreKey.CONVERSATION_LOGS, ConfigurationRecord) == []

    @pytest.mark.asyncio
    async def test_model_list_skips_only_invalid_entries(self):
        """Test that one bad entry does not hide the valid ones."""
        store = InMemoryKeyValueStore({
            StoreKey.CONVERSATION_LOGS: (
                '[{"name": "A", "url": "https://a.example"}, {"name": 3},'
                ' {"name": "B", "url": "https://b.example"}]'
            )
        })
        records = await store.get_model_list(StoreKey.CONVERSATION_LOGS, ConfigurationRecord)
        assert [record.name for record in records] == ["A", "B"]

    @pytest.mark.asyncio
    async def test_str_list_drops_non_strings(self):
        """Test that only strings survive in URL lists."""
        store = InMemoryKeyValueStore({StoreKey.PERSONA_VIDEO_URLS: '["a", 1, null, "b"]'})
        assert await store.get_str_list(StoreKey.PERSONA_VIDEO_URLS) == ["a", "b"]

    @pytest.mark.asyncio
    async def test_model_round_trip(self, memory_store):
        """Test writing and reading back a model."""
        record = ConfigurationRecord(name="CNN", url="https://www.cnn.com")
        await memory_store.set_model(StoreKey.CONFIGURED_NEWS_SOURCE, record)
        loaded = await memory_store.get_model(StoreKey.CONFIGURED_NEWS_SOURCE, ConfigurationRecord)
        assert loaded == record

    @pytest.mark.asyncio
    async def test_delete_and_keys(self, memory_store):
        """Test delete and key listing."""
        await memory_store.set("b", 1)
        await memory_store.set("a", 2)
        assert await memory_store.keys() == ["a", "b"]
        await memory_store.delete("a")
        await memory_store.delete("missing")
        assert await memory_store.keys() == ["b"]

    @given(json_values)
    @pytest.mark.asyncio
    async def test_json_values_round_trip(self, value):
        """Property test: any JSON value reads back unchanged."""
        store = InMemoryKeyValueStore()
        await store.set("k", value)
        assert await store.get("k") == value

    def test_declared_keys(self):
        """Test that the persisted key names are stable."""
        keys = StoreKey.all()
        assert "conversationLogs" in keys
        assert "configuredNewsSource" in keys
        assert "lastPlayedTrainingIndex" in keys
        assert len(keys) == len(set(keys))


class TestSQLiteStores:
    """Tests for the SQLite backends."""

    @pytest.mark.asyncio
    async def test_values_survive_reconnect(self, sqlite_path):
        """Test that values persist across connections."""
        store = create_key_value_store("sqlite", path=sqlite_path)
        await store.connect()
        await store.set(StoreKey.USER_TIER, "premium")
        await store.set(StoreKey.USER_TIER, "free")
        await store.disconnect()

        reopened = create_key_value_store("sqlite", path=sqlite_path)
        await reopened.connect()
        try:
            assert await reopened.get(StoreKey.USER_TIER) == "free"
            assert await reopened.keys() == [StoreKey.USER_TIER]
        finally:
            await reopened.disconnect()

    @pytest.mark.asyncio
    async def test_requires_connect(self, sqlite_path):
        """Test that using a closed store raises."""
        store = create_key_value_store("sqlite", path=sqlite_path)
        with pytest.raises(RuntimeError, match="not connected"):
            await store.get("x")

    @pytest.mark.asyncio
    async def test_video_blobs(self, sqlite_path):
        """Test put, get and ordered get_all."""
        videos = create_video_store("sqlite", path=sqlite_path)
        await videos.connect()
        try:
            await videos.put(VideoBlob(collection="persona", slot=2, data=b"two"))
            await videos.put(VideoBlob(collection="persona", slot=0, data=b"zero"))
            await videos.put(VideoBlob(collection="training", slot=1, data=b"t"))
            await videos.put(VideoBlob(collection="persona", slot=0, data=b"replaced"))

            blob = await videos.get("persona", 0)
            assert blob.data == b"replaced"
            assert await videos.get("persona", 1) is None
            assert [b.slot for b in await videos.get_all("persona")] == [0, 2]
        finally:
            await videos.disconnect()


class TestVideoBlob:
    """Tests for VideoBlob."""

    def test_reference_and_size(self):
        """Test the local reference and size in MB."""
        blob = VideoBlob(collection="training", slot=3, data=b"x" * 1024 * 1024)
        assert blob.reference == f"{LOCAL_REFERENCE_PREFIX}training/3"
        assert blob.size_mb == pytest.approx(1.0)

    @pytest.mark.asyncio
    async def test_memory_store_orders_by_slot(self):
        """Test in-memory get_all ordering."""
        videos = create_video_store("memory")
        await videos.put(VideoBlob(collection="persona", slot=1, data=b"b"))
        await videos.put(VideoBlob(collection="persona", slot=0, data=b"a"))
        assert [b.data for b in await videos.get_all("persona")] == [b"a", b"b"]
