"""Tests for infrastructure.i18n.snapshots module."""

import pytest

from tests.factories.i18n import make_bundle

pytestmark = pytest.mark.unit


class TestBundleSnapshotStore:
    """Tests for BundleSnapshotStore."""

    @pytest.mark.asyncio
    async def test_write_then_read(self, snapshots, app_settings):
        bundle = make_bundle("fr", {"greeting.title": "Bonjour !"})

        await snapshots.write("fr", bundle, 1_700_000_000.0)
        snapshot = await snapshots.read("fr")

        assert snapshot.bundle == bundle
        assert snapshot.cached_at == 1_700_000_000.0
        stored = await app_settings.get("i18n.bundle:fr")
        assert stored["cachedAt"] == "2023-11-14T22:13:20+00:00"

    @pytest.mark.asyncio
    async def test_read_missing(self, snapshots):
        assert await snapshots.read("fr") is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            "not a mapping",
            {"bundle": {}},
            {"cachedAt": "yesterday", "bundle": {}},
            {"cachedAt": "2024-05-01T10:00:00+00:00", "bundle": {"dictionary": {}}},
        ],
    )
    async def test_malformed_snapshot_is_a_miss(self, snapshots, app_settings, payload):
        await app_settings.set("i18n.bundle:fr", payload)

        assert await snapshots.read("fr") is None

    @pytest.mark.asyncio
    async def test_naive_timestamp_is_utc(self, snapshots, app_settings):
        await app_settings.set(
            "i18n.bundle:fr",
            {"cachedAt": "2023-11-14T22:13:20", "bundle": make_bundle("fr").to_dict()},
        )

        snapshot = await snapshots.read("fr")

        assert snapshot.cached_at == 1_700_000_000.0

    @pytest.mark.asyncio
    async def test_delete_and_list(self, snapshots, app_settings):
        await snapshots.write("fr", make_bundle("fr"), 1.0)
        await snapshots.write("__default", make_bundle("en"), 1.0)
        await app_settings.set("feature.flag", True)

        assert await snapshots.list_cache_keys() == ["__default", "fr"]

        await snapshots.delete("fr")

        assert await snapshots.list_cache_keys() == ["__default"]
        assert await app_settings.get("feature.flag") is True
