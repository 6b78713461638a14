"""
Sanitization engine adapter.

Wraps the Bleach cleaners behind an asynchronous interface. The cleaners are
built lazily on first use; concurrent first callers share a single
acquisition, and later calls reuse the loaded engine. Cleaning itself runs in
a worker thread so large documents do not block the event loop.
"""

from __future__ import annotations

import asyncio
import threading
from functools import partial
from typing import Callable, Dict, Optional

from loguru import logger

from ..errors import SanitizationError, SanitizerUnavailableError
from ..utils.sanitizer import (
    DEFAULT_PROFILE,
    PROFILES,
    build_cleaner,
    clean_with,
    get_profile,
)


CleanFn = Callable[[str], str]
Loader = Callable[[], Dict[str, CleanFn]]


def load_cleaners() -> Dict[str, CleanFn]:
    """Build one clean function per registered profile."""
    cleaners: Dict[str, CleanFn] = {}
    for name, profile in PROFILES.items():
        cleaners[name] = partial(clean_with, build_cleaner(profile), profile)
    return cleaners


class SanitizerEngine:
    """Lazily acquired sanitization capability."""

    def __init__(self, loader: Optional[Loader] = None):
        self._loader: Loader = loader or load_cleaners
        self._cleaners: Optional[Dict[str, CleanFn]] = None
        self._acquiring: Optional[asyncio.Task] = None
        # Bleach cleaners are not thread-safe
        self._clean_lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._cleaners is not None

    def reset(self) -> None:
        """Forget the loaded engine so the next call acquires it again."""
        self._cleaners = None
        self._acquiring = None

    async def _load(self) -> Dict[str, CleanFn]:
        try:
            cleaners = await asyncio.to_thread(self._loader)
        except Exception as exc:
            logger.error(f"Failed to load sanitization engine: {exc}")
            raise SanitizerUnavailableError(
                f"Sanitization engine could not be loaded: {exc}"
            ) from exc
        finally:
            self._acquiring = None
        self._cleaners = cleaners
        logger.info(f"Sanitization engine loaded with profiles: {', '.join(sorted(cleaners))}")
        return cleaners

    def _clean_locked(self, clean: CleanFn, raw: str) -> str:
        with self._clean_lock:
            return clean(raw)

    async def acquire(self) -> Dict[str, CleanFn]:
        """Load the engine once; concurrent callers await the same acquisition."""
        if self._cleaners is not None:
            return self._cleaners
        if self._acquiring is None:
            self._acquiring = asyncio.ensure_future(self._load())
        # Shielded so a cancelled waiter does not abort the shared load
        return await asyncio.shield(self._acquiring)

    async def sanitize(self, raw: Optional[str], profile: str = DEFAULT_PROFILE) -> str:
        """
        Sanitize raw HTML under the given profile.

        Args:
            raw: Author-supplied markup; empty or None short-circuits to ""
            profile: Name of a registered sanitization profile

        Returns:
            str: Markup with scripts, event handlers and unsafe URIs removed

        Raises:
            SanitizerUnavailableError: The engine could not be loaded
            SanitizationError: The engine failed on this input
        """
        if not raw:
            return ""

        get_profile(profile)
        cleaners = await self.acquire()
        clean = cleaners.get(profile)
        if clean is None:
            raise SanitizerUnavailableError(
                f"Loaded engine does not provide profile '{profile}'"
            )

        try:
            return await asyncio.to_thread(self._clean_locked, clean, raw)
        except Exception as exc:
            logger.error(f"Sanitization failed under profile '{profile}': {exc}")
            raise SanitizationError(f"Sanitization failed: {exc}") from exc


_engine = SanitizerEngine()


def get_engine() -> SanitizerEngine:
    """Return the shared process-wide sanitization engine."""
    return _engine
