"""
Unit tests for the rich text viewer component.

Async behavior is driven with asyncio.run; the gated engine lets each test
decide when a sanitization call completes.
"""

import asyncio
import re

import pytest
from pydantic import ValidationError

from richview.components.rich_text_viewer import ContentState, RichTextViewer, render_once
from richview.errors import SanitizationError, SanitizerUnavailableError
from richview.models.viewer import ViewerOptions
from richview.services.sanitizer_engine import SanitizerEngine


class GatedEngine:
    """Engine whose calls only complete once released."""

    def __init__(self):
        self.calls = []
        self.gates = {}

    def _gate(self, raw):
        if raw not in self.gates:
            self.gates[raw] = asyncio.Event()
        return self.gates[raw]

    async def sanitize(self, raw, profile="html"):
        self.calls.append(raw)
        await self._gate(raw).wait()
        return f"<p>{raw}</p>"

    def release(self, raw):
        self._gate(raw).set()


class CountingEngine:
    def __init__(self):
        self.calls = []

    async def sanitize(self, raw, profile="html"):
        self.calls.append(raw)
        return raw


class FailingEngine:
    def __init__(self, exc):
        self.exc = exc
        self.calls = 0

    async def sanitize(self, raw, profile="html"):
        self.calls += 1
        raise self.exc


class FlakyEngine:
    """Engine whose first call fails and later calls pass content through."""

    def __init__(self):
        self.calls = 0

    async def sanitize(self, raw, profile="html"):
        self.calls += 1
        if self.calls == 1:
            raise SanitizationError("first call fails")
        return raw


async def spin(times=5):
    for _ in range(times):
        await asyncio.sleep(0)


def _text(markup):
    return re.sub(r"<[^>]+>", "", markup)


def test_renders_sanitized_markup():
    async def scenario():
        viewer = RichTextViewer(SanitizerEngine()).mount()
        viewer.set_props(html="<p>Hello <strong>world</strong></p>")
        await viewer.settle()
        return viewer

    viewer = asyncio.run(scenario())
    html = viewer.render()
    assert viewer.state is ContentState.COMMITTED
    assert "<strong>world</strong>" in html
    assert "Hello world" in _text(html)


def test_script_content_never_reaches_surface():
    async def scenario():
        viewer = RichTextViewer(SanitizerEngine()).mount()
        viewer.set_props(html="<b>Hi</b><script>alert(1)</script>")
        await viewer.settle()
        return viewer.render()

    html = asyncio.run(scenario())
    assert "Hi" in html
    assert "alert(" not in html


def test_event_handlers_are_removed_but_text_kept():
    async def scenario():
        viewer = RichTextViewer(SanitizerEngine()).mount()
        viewer.set_props(html='<div onclick="alert(1)">Click me</div>')
        await viewer.settle()
        return viewer.committed_html

    assert asyncio.run(scenario()) == "<div>Click me</div>"


@pytest.mark.parametrize("content", [None, ""])
def test_empty_content_bypasses_engine(content):
    engine = CountingEngine()

    async def scenario():
        viewer = RichTextViewer(engine).mount()
        viewer.set_props(html=content)
        await viewer.settle()
        return viewer

    viewer = asyncio.run(scenario())
    assert engine.calls == []
    assert viewer.state is ContentState.IDLE
    assert viewer.committed_html == ""
    assert viewer.render().endswith("></div>")


def test_stale_result_is_never_committed_after_newer_request():
    engine = GatedEngine()

    async def scenario():
        viewer = RichTextViewer(engine).mount()
        viewer.set_props(html="First")
        await spin()
        viewer.set_props(html="Second")
        await spin()

        engine.release("Second")
        await spin()
        assert viewer.committed_html == "<p>Second</p>"

        engine.release("First")
        await viewer.settle()
        return viewer

    viewer = asyncio.run(scenario())
    assert viewer.committed_html == "<p>Second</p>"
    assert viewer.state is ContentState.COMMITTED
    assert viewer.discarded == 1
    assert engine.calls == ["First", "Second"]


def test_previous_output_stays_visible_while_newer_request_is_pending():
    engine = GatedEngine()

    async def scenario():
        viewer = RichTextViewer(engine).mount()
        viewer.set_props(html="A")
        engine.release("A")
        await viewer.settle()

        viewer.set_props(html="B")
        viewer.set_props(html="C")
        await spin()
        engine.release("B")
        await spin()
        # B was superseded by C before completing
        assert viewer.committed_html == "<p>A</p>"
        assert viewer.state is ContentState.SANITIZING

        engine.release("C")
        await viewer.settle()
        return viewer

    viewer = asyncio.run(scenario())
    assert viewer.committed_html == "<p>C</p>"
    assert viewer.discarded == 1


def test_switching_to_empty_discards_in_flight_result():
    engine = GatedEngine()

    async def scenario():
        viewer = RichTextViewer(engine).mount()
        viewer.set_props(html="Slow")
        await spin()
        viewer.set_props(html="")
        assert viewer.state is ContentState.IDLE
        engine.release("Slow")
        await viewer.settle()
        return viewer

    viewer = asyncio.run(scenario())
    assert viewer.committed_html == ""
    assert viewer.state is ContentState.IDLE
    assert viewer.discarded == 1


def test_unmount_makes_in_flight_result_inert():
    engine = GatedEngine()

    async def scenario():
        viewer = RichTextViewer(engine).mount()
        viewer.set_props(html="Late")
        await spin()
        viewer.unmount()
        engine.release("Late")
        await viewer.settle()

        viewer.set_props(html="After")
        await viewer.settle()
        return viewer

    viewer = asyncio.run(scenario())
    assert viewer.committed_html == ""
    assert viewer.state is ContentState.UNMOUNTED
    assert not viewer.mounted
    assert viewer.discarded == 1
    assert viewer.render() == ""
    assert engine.calls == ["Late"]


def test_style_change_does_not_resanitize():
    engine = CountingEngine()

    async def scenario():
        viewer = RichTextViewer(engine).mount()
        viewer.set_props(html="<p>x</p>")
        await viewer.settle()
        viewer.set_props(font_size="20px")
        viewer.set_props(ViewerOptions(html="<p>x</p>", color="#1e40af"))
        await viewer.settle()
        return viewer

    viewer = asyncio.run(scenario())
    assert engine.calls == ["<p>x</p>"]
    html = viewer.render()
    assert "color: #1e40af" in html
    assert "font-size: 16px" in html


def test_engine_failure_degrades_to_empty_output_and_reports():
    reported = []
    engine = FailingEngine(SanitizerUnavailableError("engine missing"))

    async def scenario():
        viewer = RichTextViewer(engine, on_error=lambda exc, token: reported.append((exc, token))).mount()
        viewer.set_props(html="<p>x</p>")
        await viewer.settle()
        return viewer

    viewer = asyncio.run(scenario())
    assert viewer.committed_html == ""
    assert viewer.state is ContentState.IDLE
    assert isinstance(viewer.last_error, SanitizerUnavailableError)
    assert len(reported) == 1
    assert reported[0][1] == 1


def test_unexpected_engine_exception_is_wrapped():
    reported = []

    async def scenario():
        viewer = RichTextViewer(FailingEngine(KeyError("boom")), on_error=lambda exc, token: reported.append(exc)).mount()
        viewer.set_props(html="<p>x</p>")
        await viewer.settle()

    asyncio.run(scenario())
    assert isinstance(reported[0], SanitizationError)
    assert isinstance(reported[0].__cause__, KeyError)


def test_raising_error_hook_is_contained():
    def hook(exc, token):
        raise RuntimeError("hook broke")

    async def scenario():
        viewer = RichTextViewer(FailingEngine(SanitizationError("bad")), on_error=hook).mount()
        viewer.set_props(html="<p>x</p>")
        await viewer.settle()
        return viewer

    viewer = asyncio.run(scenario())
    assert viewer.committed_html == ""


def test_resupplying_same_content_retries_after_failure():
    calls = {"n": 0}

    def loader():
        calls["n"] += 1
        if calls["n"] == 1:
            raise RuntimeError("not yet")
        return {"html": lambda raw: raw.upper()}

    async def scenario():
        viewer = RichTextViewer(SanitizerEngine(loader)).mount()
        viewer.set_props(html="<p>x</p>")
        await viewer.settle()
        assert viewer.committed_html == ""
        viewer.set_props(html="<p>x</p>")
        await viewer.settle()
        return viewer

    viewer = asyncio.run(scenario())
    assert viewer.committed_html == "<P>X</P>"
    assert viewer.last_error is None


def test_style_only_change_after_failure_does_not_retry():
    engine = FlakyEngine()

    async def scenario():
        viewer = RichTextViewer(engine, on_error=lambda exc, token: None).mount()
        viewer.set_props(html="<p>x</p>")
        await viewer.settle()
        viewer.set_props(font_size="20px")
        await viewer.settle()
        assert engine.calls == 1
        assert viewer.committed_html == ""
        assert "font-size: 20px" in viewer.render()

        viewer.set_props(html="<p>x</p>")
        await viewer.settle()
        return viewer

    viewer = asyncio.run(scenario())
    assert engine.calls == 2
    assert viewer.committed_html == "<p>x</p>"


def test_same_content_is_not_resanitized_after_success():
    engine = CountingEngine()

    async def scenario():
        viewer = RichTextViewer(engine).mount()
        viewer.set_props(html="<p>x</p>")
        await viewer.settle()
        viewer.set_props(html="<p>x</p>")
        await viewer.settle()

    asyncio.run(scenario())
    assert engine.calls == ["<p>x</p>"]


def test_class_name_and_styles_are_written_to_surface():
    async def scenario():
        viewer = RichTextViewer(CountingEngine()).mount()
        viewer.set_props(
            html="<p>Test</p>",
            class_name="custom-class",
            font_size="18px",
            border="2px solid #10b981",
            style={"maxHeight": "200px", "fontSize": "20px"},
        )
        await viewer.settle()
        return viewer.render()

    html = asyncio.run(scenario())
    assert html.startswith('<div class="custom-class" style="')
    assert "font-size: 20px" in html
    assert "font-size: 18px" not in html
    assert "border: 2px solid #10b981" in html
    assert "max-height: 200px" in html
    assert html.endswith("<p>Test</p></div>")


def test_default_styles_are_applied():
    async def scenario():
        viewer = RichTextViewer(CountingEngine()).mount()
        viewer.set_props(html="<p>Test</p>")
        await viewer.settle()
        return viewer.render()

    html = asyncio.run(scenario())
    for declaration in (
        "font-size: 16px",
        "line-height: 1.6",
        "border: 1px solid #e5e7eb",
        "border-radius: 8px",
        "padding: 16px",
        "background-color: #ffffff",
    ):
        assert declaration in html
    assert "class=" not in html


def test_unknown_overflow_is_rejected_by_options():
    with pytest.raises(ValidationError):
        ViewerOptions(overflow="sideways")


def test_unknown_profile_is_rejected_at_construction():
    with pytest.raises(ValueError):
        RichTextViewer(CountingEngine(), profile="svg")


def test_render_once_returns_rendered_surface():
    result = asyncio.run(
        render_once(ViewerOptions(html="<p>Hi</p>", max_height="200px", overflow="auto"), SanitizerEngine())
    )
    assert result.state == "committed"
    assert "max-height: 200px" in result.html
    assert "overflow: auto" in result.html
    assert "<p>Hi</p>" in result.html
