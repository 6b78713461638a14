"""
Generation guard for asynchronous sanitization results.

Every content change mints a new token; a completed result may only be
committed while its token is still the current one. Closing the guard kills
the current token so in-flight work finishing after teardown stays inert.
"""

import itertools
from typing import Optional

from ..errors import GuardClosedError


class GenerationGuard:
    """Issue strictly increasing tokens and track which one is current."""

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._current: Optional[int] = None
        self._closed = False

    @property
    def current(self) -> Optional[int]:
        return self._current

    @property
    def closed(self) -> bool:
        return self._closed

    def mint(self) -> int:
        """Mint a token and make it current; the previous one is stale from now on."""
        if self._closed:
            raise GuardClosedError("Cannot mint a generation token after close()")
        token = next(self._counter)
        self._current = token
        return token

    def is_current(self, token: int) -> bool:
        return not self._closed and token == self._current

    def close(self) -> None:
        self._closed = True
        self._current = None
