"""Two-tier translation bundle cache.

Bundles live in process memory keyed by ``cache_key_for(code)`` and are
mirrored to the application settings table so a fresh process starts warm.

Per cache key the cache moves through absent -> fresh -> stale-serving ->
refreshing -> fresh, and can drop to a fallback bundle built from static data
at any point. Callers are never blocked by a refresh: stale entries are
returned immediately while a single background task reloads them.
"""

import asyncio
import time
from dataclasses import dataclass, replace
from typing import (
    Awaitable,
    Callable,
    Dict,
    Iterable,
    List,
    Optional,
    Set,
    Tuple,
)

from infrastructure.configuration.infrastructure.translations import TranslationSettings
from infrastructure.i18n.exceptions import LanguageConfigurationError
from infrastructure.i18n.loader import BundleLoader
from infrastructure.i18n.models import DEFAULT_CACHE_KEY, TranslationBundle, cache_key_for
from infrastructure.i18n.resolvers import normalize_language_code
from infrastructure.i18n.snapshots import BundleSnapshot, BundleSnapshotStore
from infrastructure.i18n.static_bundle import build_fallback_bundle
from infrastructure.logging import get_module_logger
from infrastructure.resilience import CircuitBreaker, OperationTimeoutError, with_timeout

logger = get_module_logger()

FallbackBuilder = Callable[[Optional[str]], TranslationBundle]
InvalidationHook = Callable[[List[str]], None]

# Fallback entries kept for codes no loaded bundle has listed yet.
MAX_UNCONFIRMED_FALLBACKS = 32


@dataclass(frozen=True)
class CachedBundle:
    """An in-memory cache entry. Replaced whole, never mutated.

    Attributes:
        data: The cached bundle.
        cached_at: Epoch seconds at which ``data`` was loaded.
        is_fallback: Whether ``data`` was built from static data only.
    """

    data: TranslationBundle
    cached_at: float
    is_fallback: bool = False


class TranslationCache:
    """Stale-while-revalidate cache in front of a :class:`BundleLoader`.

    Every live load is either backgrounded or time-boxed, and a fallback
    bundle that needs no I/O is always available, so ``get`` never raises
    and never waits longer than the initial-load deadline.

    Timed-out loads are abandoned, not cancelled. Their late results are
    discarded.

    Usage:
        cache = TranslationCache(loader, settings, snapshots=snapshot_store)
        bundle = await cache.get("fr")
        await cache.invalidate(["fr"])
    """

    def __init__(
        self,
        loader: BundleLoader,
        settings: TranslationSettings,
        snapshots: Optional[BundleSnapshotStore] = None,
        breaker: Optional[CircuitBreaker] = None,
        fallback: FallbackBuilder = build_fallback_bundle,
        clock: Callable[[], float] = time.time,
        on_invalidate: Optional[InvalidationHook] = None,
        is_production: bool = False,
    ):
        self._loader = loader
        self._settings = settings
        self._snapshots = snapshots
        self._clock = clock
        self.breaker = breaker or CircuitBreaker(
            "translation_db",
            cooldown_seconds=settings.failure_cooldown_seconds,
            clock=clock,
        )
        self._fallback = fallback
        self._on_invalidate = on_invalidate
        self._is_production = is_production

        self._entries: Dict[str, CachedBundle] = {}
        # Single in-flight handle per key for background refreshes.
        self._refreshing: Dict[str, "asyncio.Task[None]"] = {}
        # Shared cold resolution per key so concurrent misses load once.
        self._cold: Dict[str, "asyncio.Task[TranslationBundle]"] = {}
        # Bumped on invalidation; loads started under an older generation
        # do not write their result back.
        self._generations: Dict[str, int] = {}
        self._background: Set["asyncio.Task[None]"] = set()
        # Language codes listed by loaded bundles; other codes share the
        # default bundle. Cleared on invalidation.
        self._known_codes: Set[str] = set()
        # Keys holding a fallback entry for a code not yet seen in a bundle.
        self._unconfirmed: Set[str] = set()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get(self, preferred_code: Optional[str] = None) -> TranslationBundle:
        """Return the bundle for ``preferred_code``. Never raises."""
        key, preferred_code = self._route(preferred_code)

        if self._settings.skip_cache:
            return await self._get_uncached(key, preferred_code)

        entry = self._entries.get(key)
        if entry is None:
            return await self._get_cold(key, preferred_code)

        if self._is_stale(entry):
            self.schedule_bundle_refresh(key, preferred_code)
        return entry.data

    def peek(self, preferred_code: Optional[str] = None) -> Optional[CachedBundle]:
        """Return the in-memory entry for ``preferred_code`` without loading."""
        key, _ = self._route(preferred_code)
        return self._entries.get(key)

    def _route(self, preferred_code: Optional[str]) -> Tuple[str, Optional[str]]:
        """Map a caller-supplied code to its cache key and the code to load.

        Malformed codes, and codes absent from every loaded bundle's language
        list, resolve to the default language, so they share its entry.
        """
        code = normalize_language_code(preferred_code)
        if code is None:
            return DEFAULT_CACHE_KEY, None
        if self._known_codes and code not in self._known_codes:
            return DEFAULT_CACHE_KEY, None
        return cache_key_for(code), code

    @property
    def skip_cache(self) -> bool:
        return self._settings.skip_cache

    def cached_keys(self) -> List[str]:
        return sorted(self._entries)

    def is_refreshing(self, cache_key: str) -> bool:
        return cache_key in self._refreshing

    def _is_stale(self, entry: CachedBundle) -> bool:
        age = self._clock() - entry.cached_at
        if age > self._settings.cache_ttl_seconds:
            return True
        # Retry fallbacks once the breaker cooldown has had a chance to elapse.
        return entry.is_fallback and age > self._settings.failure_cooldown_seconds

    async def _get_uncached(self, key: str, preferred_code: Optional[str]) -> TranslationBundle:
        if self.breaker.should_skip():
            entry = self._entries.get(key)
            return entry.data if entry is not None else self._fallback(preferred_code)
        try:
            return await self._load_live(
                key, preferred_code, self._settings.initial_load_timeout_seconds
            )
        except Exception:  # pylint: disable=broad-except
            entry = self._entries.get(key)
            return entry.data if entry is not None else self._fallback(preferred_code)

    async def _get_cold(self, key: str, preferred_code: Optional[str]) -> TranslationBundle:
        task = self._cold.get(key)
        if task is None:
            task = asyncio.ensure_future(self._resolve_cold(key, preferred_code))
            self._cold[key] = task
            task.add_done_callback(lambda done, k=key: self._forget(self._cold, k, done))
        # A cancelled caller must not cancel the load the others are sharing.
        return await asyncio.shield(task)

    async def _resolve_cold(self, key: str, preferred_code: Optional[str]) -> TranslationBundle:
        generation = self._generations.get(key, 0)

        if self.breaker.should_skip():
            logger.info("translation_db_skipped_circuit_open", cache_key=key)
            return self._adopt_fallback(key, preferred_code, generation)

        snapshot = await self._read_snapshot(key)
        if snapshot is not None:
            entry = CachedBundle(
                data=self._with_static_text(snapshot.bundle), cached_at=snapshot.cached_at
            )
            if self._generations.get(key, 0) == generation:
                self._entries[key] = entry
                self._learn_languages(entry.data)
                logger.debug("translation_snapshot_adopted", cache_key=key)
                if self._is_stale(entry):
                    self.schedule_bundle_refresh(key, preferred_code)
            return entry.data

        try:
            bundle = await self._load_live(
                key, preferred_code, self._settings.initial_load_timeout_seconds
            )
        except Exception:  # pylint: disable=broad-except
            return self._adopt_fallback(key, preferred_code, generation)

        self._store(key, bundle, generation)
        return bundle

    def _adopt_fallback(
        self, key: str, preferred_code: Optional[str], generation: int
    ) -> TranslationBundle:
        bundle = self._fallback(preferred_code)
        if self._generations.get(key, 0) != generation:
            return bundle

        unconfirmed = key != DEFAULT_CACHE_KEY and key not in self._known_codes
        if unconfirmed and key not in self._unconfirmed:
            if len(self._unconfirmed) >= MAX_UNCONFIRMED_FALLBACKS:
                logger.debug("translation_fallback_not_cached", cache_key=key)
                return bundle
            self._unconfirmed.add(key)

        self._entries[key] = CachedBundle(data=bundle, cached_at=self._clock(), is_fallback=True)
        logger.info("translation_fallback_bundle_cached", cache_key=key)
        self.schedule_bundle_refresh(key, preferred_code)
        return bundle

    # ------------------------------------------------------------------
    # Live loads
    # ------------------------------------------------------------------

    async def _load_live(
        self, key: str, preferred_code: Optional[str], timeout_seconds: float
    ) -> TranslationBundle:
        """Time-boxed load with breaker bookkeeping. Raises on any failure."""
        try:
            bundle = await with_timeout(
                self._loader.load_bundle(preferred_code),
                timeout_seconds,
                label=f"translation bundle load ({key})",
            )
        except OperationTimeoutError as e:
            if not self._is_production:
                logger.warning(
                    "translation_bundle_load_timed_out",
                    cache_key=key,
                    timeout_seconds=e.timeout_seconds,
                )
            raise
        except LanguageConfigurationError as e:
            logger.error("translation_language_configuration_error", cache_key=key, error=str(e))
            raise
        except Exception as e:
            self.breaker.mark_failure(e)
            logger.error(
                "translation_bundle_load_failed",
                cache_key=key,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

        self.breaker.clear_failure()
        return bundle

    def schedule_bundle_refresh(self, cache_key: str, preferred_code: Optional[str] = None) -> bool:
        """Start a background refresh of ``cache_key`` unless one is pending.

        Returns:
            True if a refresh task was started.
        """
        if cache_key in self._refreshing:
            return False
        if self.breaker.should_skip():
            logger.debug("translation_refresh_skipped_circuit_open", cache_key=cache_key)
            return False

        task = self._spawn(self._refresh(cache_key, preferred_code))
        self._refreshing[cache_key] = task
        task.add_done_callback(
            lambda done, k=cache_key: self._forget(self._refreshing, k, done)
        )
        return True

    async def _refresh(self, key: str, preferred_code: Optional[str]) -> None:
        generation = self._generations.get(key, 0)
        try:
            bundle = await self._load_live(
                key, preferred_code, self._settings.query_timeout_seconds
            )
        except Exception:  # pylint: disable=broad-except
            # Already logged; the existing entry keeps being served.
            return

        self._store(key, bundle, generation)
        logger.info("translation_bundle_refreshed", cache_key=key)

    async def refresh(self, preferred_code: Optional[str] = None) -> TranslationBundle:
        """Load ``preferred_code`` live, bypassing memory and snapshots.

        The result replaces the cached entry and its snapshot is written
        before returning.

        Raises:
            OperationTimeoutError: If the load missed the initial-load deadline.
            LanguageConfigurationError: If no active language exists.
            DataStoreError: If the store could not be read.
        """
        key = cache_key_for(preferred_code)
        generation = self._generations.get(key, 0)
        bundle = await self._load_live(
            key, preferred_code, self._settings.initial_load_timeout_seconds
        )
        entry = self._store(key, bundle, generation, persist=False)
        if entry is not None:
            await self._persist(key, entry, generation)
        return bundle

    def _store(
        self,
        key: str,
        bundle: TranslationBundle,
        generation: int,
        persist: bool = True,
    ) -> Optional[CachedBundle]:
        if self._generations.get(key, 0) != generation:
            logger.debug("translation_bundle_discarded_after_invalidation", cache_key=key)
            return None

        self._learn_languages(bundle)
        if key != DEFAULT_CACHE_KEY and cache_key_for(bundle.active_language.code) != key:
            # The loader fell back to another language; later requests for
            # this code route to the default entry instead.
            logger.debug(
                "translation_bundle_not_cached_for_unlisted_code",
                cache_key=key,
                active_language=bundle.active_language.code,
            )
            return None

        entry = CachedBundle(data=bundle, cached_at=self._clock())
        self._entries[key] = entry
        if persist:
            self._spawn(self._persist(key, entry, generation))
        return entry

    def _learn_languages(self, bundle: TranslationBundle) -> None:
        """Record the codes ``bundle`` lists and drop entries for any others."""
        codes = {cache_key_for(language.code) for language in bundle.languages}
        codes.add(cache_key_for(bundle.active_language.code))
        self._known_codes.update(codes)
        self._unconfirmed.difference_update(codes)

        for key in list(self._entries):
            if key != DEFAULT_CACHE_KEY and key not in self._known_codes:
                del self._entries[key]
                self._unconfirmed.discard(key)

    def _with_static_text(self, bundle: TranslationBundle) -> TranslationBundle:
        """Fill keys missing from a persisted bundle with their static text."""
        base = self._fallback(bundle.active_language.code).dictionary
        if all(key in bundle.dictionary for key in base):
            return bundle
        dictionary = dict(base)
        dictionary.update(bundle.dictionary)
        return replace(bundle, dictionary=dictionary)

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    async def _read_snapshot(self, key: str) -> Optional[BundleSnapshot]:
        if self._snapshots is None:
            return None
        try:
            return await with_timeout(
                self._snapshots.read(key),
                self._settings.query_timeout_seconds,
                label=f"translation snapshot read ({key})",
            )
        except OperationTimeoutError:
            if not self._is_production:
                logger.warning("translation_snapshot_read_timed_out", cache_key=key)
            return None
        except Exception as e:  # pylint: disable=broad-except
            self.breaker.mark_failure(e)
            logger.error("translation_snapshot_read_failed", cache_key=key, error=str(e))
            return None

    async def _persist(self, key: str, entry: CachedBundle, generation: int) -> None:
        if self._snapshots is None:
            return
        if self._generations.get(key, 0) != generation:
            return
        try:
            await with_timeout(
                self._snapshots.write(key, entry.data, entry.cached_at),
                self._settings.query_timeout_seconds,
                label=f"translation snapshot write ({key})",
            )
        except OperationTimeoutError:
            if not self._is_production:
                logger.warning("translation_snapshot_write_timed_out", cache_key=key)
        except Exception as e:  # pylint: disable=broad-except
            logger.error("translation_snapshot_write_failed", cache_key=key, error=str(e))

    # ------------------------------------------------------------------
    # Invalidation
    # ------------------------------------------------------------------

    async def invalidate(self, language_codes: Optional[Iterable[str]] = None) -> List[str]:
        """Drop cached bundles from memory and the snapshot store.

        Args:
            language_codes: Codes to invalidate. ``"__default"`` is always
                included. When omitted, every cached or persisted bundle is
                invalidated.

        Returns:
            The invalidated cache keys, sorted.
        """
        if language_codes is None:
            keys = set(self._entries)
            keys.update(await self._persisted_keys())
        else:
            keys = {cache_key_for(code) for code in language_codes}
            keys.add(DEFAULT_CACHE_KEY)

        for key in keys:
            self._entries.pop(key, None)
            self._cold.pop(key, None)
            self._refreshing.pop(key, None)
            self._unconfirmed.discard(key)
            self._generations[key] = self._generations.get(key, 0) + 1
        self._known_codes.clear()

        if self._snapshots is not None and keys:
            await asyncio.gather(*(self._delete_snapshot(key) for key in keys))

        invalidated = sorted(keys)
        logger.info("translation_bundles_invalidated", cache_keys=invalidated)

        if self._on_invalidate is not None:
            try:
                self._on_invalidate(invalidated)
            except Exception as e:  # pylint: disable=broad-except
                logger.error("translation_invalidation_hook_failed", error=str(e))

        return invalidated

    async def _persisted_keys(self) -> List[str]:
        if self._snapshots is None:
            return []
        try:
            return await with_timeout(
                self._snapshots.list_cache_keys(),
                self._settings.query_timeout_seconds,
                label="translation snapshot listing",
            )
        except Exception as e:  # pylint: disable=broad-except
            logger.warning("translation_snapshot_listing_failed", error=str(e))
            return []

    async def _delete_snapshot(self, key: str) -> None:
        try:
            await with_timeout(
                self._snapshots.delete(key),
                self._settings.query_timeout_seconds,
                label=f"translation snapshot delete ({key})",
            )
        except Exception as e:  # pylint: disable=broad-except
            logger.warning("translation_snapshot_delete_failed", cache_key=key, error=str(e))

    # ------------------------------------------------------------------
    # Background tasks
    # ------------------------------------------------------------------

    def _spawn(self, coro: Awaitable[None]) -> "asyncio.Task[None]":
        task = asyncio.ensure_future(coro)
        self._background.add(task)
        task.add_done_callback(self._background.discard)
        return task

    @staticmethod
    def _forget(table: Dict[str, "asyncio.Future"], key: str, done: "asyncio.Future") -> None:
        if table.get(key) is done:
            del table[key]

    async def wait_for_refreshes(self) -> None:
        """Wait until every background refresh and snapshot write finished."""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)
