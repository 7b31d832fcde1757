"""
Conjugation Cache

Two key spaces in front of generation and storage:
- conjugation:verb:<verbId>                   full VerbConjugation records
- conjugation:generated:<root>:<patternId>    raw generated paradigms

The cache is only an accelerator. Every value can be rebuilt by
regenerating or by asking the system of record, so a backend failure is
logged and reported as a miss; it never fails the caller.
"""

import json
import logging
import threading
import time
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from .config import ConjugatorConfig, config as default_config
from .errors import CacheBackendError
from .paradigms import ConjugationForms
from .root_types import RootLike, normalize_root
from .schemas import VerbConjugation

logger = logging.getLogger(__name__)

# Backend failures that mean "cache unavailable"
BACKEND_ERRORS = (CacheBackendError, OSError)


class CacheBackend:
    """
    Key-value store the cache writes through.

    Values are strings. Implementations raise CacheBackendError (or an
    OSError from their transport) when the store cannot be reached.
    """

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError

    def exists(self, key: str) -> bool:
        raise NotImplementedError

    def keys(self, prefix: str = '') -> List[str]:
        raise NotImplementedError


class InMemoryCacheBackend(CacheBackend):
    """Process-local backend with per-key expiry."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._lock = threading.Lock()
        self._items: Dict[str, Tuple[str, Optional[float]]] = {}

    def _live(self, key: str) -> Optional[str]:
        # Caller holds the lock
        item = self._items.get(key)
        if item is None:
            return None
        value, expiry = item
        if expiry is not None and self._clock() >= expiry:
            del self._items[key]
            return None
        return value

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._live(key)

    def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        expiry = self._clock() + ttl if ttl else None
        with self._lock:
            self._items[key] = (value, expiry)

    def delete(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def exists(self, key: str) -> bool:
        with self._lock:
            return self._live(key) is not None

    def keys(self, prefix: str = '') -> List[str]:
        with self._lock:
            candidates = [k for k in self._items if k.startswith(prefix)]
            return [k for k in candidates if self._live(k) is not None]


class ConjugationCache:
    """
    Cache for conjugation records and generated paradigms.

    Usage:
        cache = ConjugationCache()
        cache.cache_conjugation(record)
        cache.get_conjugation(record.verb_id)  # -> record
    """

    def __init__(self, backend: Optional[CacheBackend] = None,
                 config: Optional[ConjugatorConfig] = None):
        self.backend = backend if backend is not None else InMemoryCacheBackend()
        self.config = config or default_config
        self._stats_lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    # ============================================
    # KEYS
    # ============================================

    @property
    def prefix(self) -> str:
        return self.config.cache_key_prefix

    def conjugation_key(self, verb_id: str) -> str:
        return f"{self.prefix}verb:{verb_id}"

    def generated_key(self, root_form: RootLike, pattern_id: str) -> str:
        """Key for a generated paradigm; the root is stripped of diacritics."""
        return f"{self.prefix}generated:{normalize_root(root_form)}:{pattern_id}"

    def _record(self, hit: bool) -> None:
        with self._stats_lock:
            if hit:
                self._hits += 1
            else:
                self._misses += 1

    # ============================================
    # RECORDS
    # ============================================

    def get_conjugation(self, verb_id: str) -> Optional[VerbConjugation]:
        """Cached record for a verb id, or None."""
        key = self.conjugation_key(verb_id)
        try:
            cached = self.backend.get(key)
        except BACKEND_ERRORS as e:
            logger.warning(f"Error getting conjugation from cache: {e}")
            self._record(False)
            return None

        if cached is None:
            logger.debug(f"Cache miss: {key}")
            self._record(False)
            return None

        try:
            record = VerbConjugation.model_validate_json(cached)
        except ValueError as e:
            logger.warning(f"Discarding unreadable cache entry {key}: {e}")
            self._record(False)
            return None

        logger.debug(f"Cache hit: {key}")
        self._record(True)
        return record

    def cache_conjugation(self, record: VerbConjugation) -> None:
        """Store a record under its verb id for cache_ttl seconds."""
        if not isinstance(record, VerbConjugation):
            record = VerbConjugation.model_validate(record)
        key = self.conjugation_key(record.verb_id)
        try:
            self.backend.set(key, record.model_dump_json(by_alias=True), self.config.cache_ttl)
        except BACKEND_ERRORS as e:
            logger.warning(f"Error caching conjugation: {e}")

    def cache_multiple_conjugations(self, records: Iterable[VerbConjugation]) -> None:
        """Store several records; a failure on one does not stop the rest."""
        for record in records:
            self.cache_conjugation(record)

    def has_conjugation(self, verb_id: str) -> bool:
        try:
            return self.backend.exists(self.conjugation_key(verb_id))
        except BACKEND_ERRORS as e:
            logger.warning(f"Error checking conjugation cache: {e}")
            return False

    def invalidate_conjugation(self, verb_id: str) -> None:
        try:
            self.backend.delete(self.conjugation_key(verb_id))
        except BACKEND_ERRORS as e:
            logger.warning(f"Error invalidating conjugation cache: {e}")

    def warm_up_cache(self, verb_ids: Iterable[str],
                      loader: Callable[[str], Optional[VerbConjugation]]) -> int:
        """
        Pre-load frequently used records from the system of record.

        Returns:
            Number of records loaded into the cache
        """
        loaded = 0
        for verb_id in verb_ids:
            if self.has_conjugation(verb_id):
                continue
            record = loader(verb_id)
            if record is not None:
                self.cache_conjugation(record)
                loaded += 1
        logger.info(f"Warmed up cache with {loaded} conjugation(s)")
        return loaded

    # ============================================
    # GENERATED PARADIGMS
    # ============================================

    def get_generated_conjugations(self, root_form: RootLike, pattern_id: str) -> Optional[ConjugationForms]:
        """Cached paradigm for (root, pattern), or None."""
        key = self.generated_key(root_form, pattern_id)
        try:
            cached = self.backend.get(key)
        except BACKEND_ERRORS as e:
            logger.warning(f"Error getting generated conjugations from cache: {e}")
            self._record(False)
            return None

        if cached is None:
            logger.debug(f"Cache miss: {key}")
            self._record(False)
            return None

        try:
            forms = ConjugationForms.from_dict(json.loads(cached))
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Discarding unreadable cache entry {key}: {e}")
            self._record(False)
            return None

        logger.debug(f"Cache hit: {key}")
        self._record(True)
        return forms

    def cache_generated_conjugations(self, root_form: RootLike, pattern_id: str,
                                     forms: ConjugationForms) -> None:
        """Store a generated paradigm for generated_cache_ttl seconds."""
        key = self.generated_key(root_form, pattern_id)
        value = json.dumps(forms.to_dict(), ensure_ascii=False)
        try:
            self.backend.set(key, value, self.config.generated_cache_ttl)
        except BACKEND_ERRORS as e:
            logger.warning(f"Error caching generated conjugations: {e}")

    # ============================================
    # MAINTENANCE
    # ============================================

    def get_cache_stats(self) -> Dict[str, int]:
        """Hit and miss counts since creation (or the last clear), plus live key count."""
        try:
            size = len(self.backend.keys(self.prefix))
        except BACKEND_ERRORS as e:
            logger.warning(f"Error reading cache size: {e}")
            size = 0
        with self._stats_lock:
            return {'hits': self._hits, 'misses': self._misses, 'size': size}

    def clear_cache(self) -> None:
        """Remove every key under the conjugation prefix and reset the counters."""
        try:
            keys = self.backend.keys(self.prefix)
            for key in keys:
                self.backend.delete(key)
            logger.info(f"Cleared {len(keys)} conjugation cache entries")
        except BACKEND_ERRORS as e:
            logger.warning(f"Error clearing conjugation cache: {e}")
        with self._stats_lock:
            self._hits = 0
            self._misses = 0


# Shared instance for callers that do not manage their own
conjugation_cache = ConjugationCache()
