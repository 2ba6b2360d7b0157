"""
Process-wide diskcache singletons.

Subclasses set `_cache_dir` (and optionally `_cache_options`); each gets its
own lazily opened Cache that is closed at interpreter exit.
"""

import os
import atexit
from threading import Lock
from typing import Any, Dict, Optional
from diskcache import Cache
import bittensor as bt


class DiskCacheSingleton:
    _cache_dir: str = None
    _cache_options: Dict[str, Any] = {}
    _cache: Optional[Cache] = None
    _lock: Lock = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._cache = None
        cls._lock = Lock()

    @classmethod
    def initialize_cache(cls) -> None:
        with cls._lock:
            if cls._cache is None:
                os.makedirs(cls._cache_dir, exist_ok=True)
                cls._cache = Cache(directory=cls._cache_dir, disk_min_file_size=0, **cls._cache_options)
                atexit.register(cls.cleanup)
                bt.logging.info(f"{cls.__name__} initialized at: {cls._cache_dir}")

    @classmethod
    def cleanup(cls) -> None:
        with cls._lock:
            if cls._cache is not None:
                cls._cache.close()
                cls._cache = None

    @classmethod
    def get_cache(cls) -> Cache:
        if cls._cache is None:
            cls.initialize_cache()
        return cls._cache

    @classmethod
    def clear(cls) -> bool:
        """Drop every entry; False when the cache was never opened."""
        if cls._cache is None:
            return False
        cls._cache.clear()
        return True
