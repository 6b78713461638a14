"""
Rich text viewer component.

Owns the single render surface: the committed sanitized markup, the resolved
style set and the optional class token. Content changes are sanitized
asynchronously; a result only reaches the surface if its generation token is
still current when it completes. Style changes re-render without touching
the sanitizer.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Any, Callable, Optional, Set

from loguru import logger
from markupsafe import Markup

from ..errors import GuardClosedError, RichViewError, SanitizationError
from ..models.viewer import RenderResult, ViewerOptions
from ..services.generation_guard import GenerationGuard
from ..services.sanitizer_engine import SanitizerEngine, get_engine
from ..utils.sanitizer import DEFAULT_PROFILE, get_profile
from ..utils.styles import resolve_styles, style_attribute, typed_overrides
from ..utils.template_env import get_surface_template

ErrorHook = Callable[[Exception, int], Any]


class ContentState(str, Enum):
    """Content state of the render surface."""

    IDLE = "idle"
    SANITIZING = "sanitizing"
    COMMITTED = "committed"
    UNMOUNTED = "unmounted"


def _log_failure(exc: Exception, token: int) -> None:
    logger.error(f"Sanitization for generation {token} failed; rendering empty content: {exc}")


class RichTextViewer:
    """Render untrusted HTML into a styled container after sanitization."""

    def __init__(
        self,
        engine: Optional[SanitizerEngine] = None,
        *,
        profile: str = DEFAULT_PROFILE,
        on_error: Optional[ErrorHook] = None,
    ):
        get_profile(profile)
        self.engine = engine or get_engine()
        self.profile = profile
        self.on_error: ErrorHook = on_error or _log_failure

        self._guard: Optional[GenerationGuard] = None
        self._options = ViewerOptions()
        self._requested: Optional[str] = None
        self._committed = ""
        self._state = ContentState.UNMOUNTED
        self._pending: Set[asyncio.Task] = set()
        self.last_error: Optional[Exception] = None
        self.discarded = 0

    @property
    def mounted(self) -> bool:
        return self._guard is not None and not self._guard.closed

    @property
    def state(self) -> ContentState:
        return self._state

    @property
    def committed_html(self) -> str:
        return self._committed

    @property
    def options(self) -> ViewerOptions:
        return self._options

    def mount(self) -> "RichTextViewer":
        """Create the surface. Mounting an already mounted viewer is a no-op."""
        if self._guard is not None:
            if self._guard.closed:
                logger.warning("Ignoring mount() on an unmounted viewer")
            return self
        self._guard = GenerationGuard()
        self._state = ContentState.IDLE
        return self

    def unmount(self) -> None:
        """Tear the surface down; in-flight sanitization can no longer commit."""
        if self._guard is None:
            self._guard = GenerationGuard()
        self._guard.close()
        self._committed = ""
        self._requested = None
        self._options = ViewerOptions()
        self._state = ContentState.UNMOUNTED

    def set_props(self, options: Optional[ViewerOptions] = None, **fields: Any) -> None:
        """
        Apply a render pass with new options.

        Must be called from inside a running event loop when the content
        changes, since sanitization is scheduled as a task on that loop.

        Args:
            options: Full option set; ``fields`` are applied on top of it
            **fields: Individual ViewerOptions fields
        """
        if self._guard is None:
            self.mount()
        if not self.mounted:
            logger.warning("Ignoring props update on an unmounted viewer")
            return

        # Only a caller re-supplying content may retry a failed attempt
        resupplied = options is not None or "html" in fields
        if options is None:
            options = self._options
        if fields:
            options = ViewerOptions(**{**options.dict(), **fields})
        self._options = options

        content = options.html or ""
        if content == self._requested and not (resupplied and self.last_error is not None):
            return
        self._request(content)

    def _request(self, content: str) -> None:
        try:
            token = self._guard.mint()
        except GuardClosedError:
            logger.warning("Generation guard closed; dropping content update")
            return

        self._requested = content
        self.last_error = None

        if not content:
            self._committed = ""
            self._state = ContentState.IDLE
            return

        self._state = ContentState.SANITIZING
        task = asyncio.get_running_loop().create_task(self._sanitize(token, content))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _sanitize(self, token: int, content: str) -> None:
        try:
            cleaned = await self.engine.sanitize(content, self.profile)
        except Exception as exc:
            failure = exc if isinstance(exc, RichViewError) else SanitizationError(str(exc))
            if failure is not exc:
                failure.__cause__ = exc
            self._fail(token, failure)
            return
        self._commit(token, cleaned)

    def _commit(self, token: int, cleaned: str) -> None:
        guard = self._guard
        if guard is None or not guard.is_current(token):
            self.discarded += 1
            logger.debug(f"Discarding stale sanitization result for generation {token}")
            return
        self._committed = cleaned
        self._state = ContentState.COMMITTED if cleaned else ContentState.IDLE

    def _fail(self, token: int, exc: Exception) -> None:
        guard = self._guard
        if guard is None or not guard.is_current(token):
            self.discarded += 1
            logger.debug(f"Discarding stale sanitization failure for generation {token}: {exc}")
            return
        self._committed = ""
        self._state = ContentState.IDLE
        self.last_error = exc
        try:
            self.on_error(exc, token)
        except Exception as hook_exc:
            logger.error(f"Sanitization error hook raised: {hook_exc}")

    async def settle(self) -> None:
        """Wait until every in-flight sanitization has completed."""
        while self._pending:
            await asyncio.gather(*list(self._pending))

    def resolved_styles(self) -> dict:
        return resolve_styles(None, typed_overrides(self._options), self._options.style)

    def render(self) -> str:
        """Render the surface markup for the current state."""
        if not self.mounted:
            return ""
        template = get_surface_template()
        return template.render(
            class_name=self._options.class_name,
            style=style_attribute(self.resolved_styles()),
            # Already sanitized; the only place raw markup is written out
            content=Markup(self._committed),
        )


async def render_once(
    options: ViewerOptions,
    engine: Optional[SanitizerEngine] = None,
    **kwargs: Any,
) -> RenderResult:
    """Mount a viewer, apply ``options``, wait for sanitization and render once."""
    viewer = RichTextViewer(engine, **kwargs).mount()
    try:
        viewer.set_props(options)
        await viewer.settle()
        return RenderResult(html=viewer.render(), state=viewer.state.value)
    finally:
        viewer.unmount()
