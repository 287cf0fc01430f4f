"""Attachable highlighter binding tokenizer, overlay, and scheduler to a host."""

from __future__ import annotations

import time
import weakref
from typing import Optional, Tuple

from hilite_engine.buffer.host import BufferHost, ChangeEvent, ChangePhase
from hilite_engine.rules.models import RuleSet
from hilite_engine.runtime import telemetry

from .overlay import ENGINE_TAG, OverlayManager, Palette
from .scheduler import DEFAULT_QUIET_MS, LOGGER_NAME, Clock, HighlightScheduler
from .tokenizer import Span, Tokenizer, tokenize

# At most one highlighter is attached to any host.
# Values are weak too: a highlighter references its host, so a strong value
# would keep the key alive forever.
_ATTACHED: "weakref.WeakKeyDictionary[object, weakref.ref[Highlighter]]" = (
    weakref.WeakKeyDictionary()
)


def attached_highlighter(host: BufferHost) -> Optional["Highlighter"]:
    ref = _ATTACHED.get(host)
    return ref() if ref is not None else None


class Highlighter:
    """Keeps a host's decorations in sync with its text for one rule set.

    Swapping languages means detaching this instance and attaching a new
    one; rules are never changed on a live highlighter.
    """

    def __init__(
        self,
        host: BufferHost,
        rules: RuleSet,
        palette: Optional[Palette] = None,
        *,
        quiet_ms: int = DEFAULT_QUIET_MS,
        clock: Clock = time.monotonic,
        tokenizer: Tokenizer = tokenize,
        tag: str = ENGINE_TAG,
    ) -> None:
        self.host = host
        self.rules = rules
        self.palette = palette or Palette()
        self.overlay = OverlayManager(tag=tag)
        self.scheduler = HighlightScheduler(self._paint, quiet_ms=quiet_ms, clock=clock)
        self._tokenize = tokenizer
        self._attached = False
        self.last_spans: Tuple[Span, ...] = ()
        self.passes = 0
        self.failures = 0

    @property
    def is_attached(self) -> bool:
        return self._attached

    def attach(self) -> None:
        """Start listening to the host and schedule the first pass."""

        if self._attached:
            return
        current = attached_highlighter(self.host)
        if current is not None and current is not self:
            current.detach()
        self.host.add_change_listener(self._on_change)
        _ATTACHED[self.host] = weakref.ref(self)
        self._attached = True
        telemetry.record_event(
            "highlighter.attach",
            data={"language": self.rules.name, "tag": self.overlay.tag},
            logger_name=LOGGER_NAME,
        )
        self.scheduler.notify()

    def detach(self) -> None:
        """Stop listening, drop any pending pass, and clear our decorations."""

        if not self._attached:
            return
        self.host.remove_change_listener(self._on_change)
        if attached_highlighter(self.host) is self:
            del _ATTACHED[self.host]
        self._attached = False
        self.scheduler.cancel()
        self.overlay.clear(self.host)
        self.last_spans = ()
        telemetry.record_event(
            "highlighter.detach",
            data={"language": self.rules.name},
            logger_name=LOGGER_NAME,
        )

    def process_timeouts(self) -> bool:
        return self.scheduler.process_timeouts()

    def refresh_now(self) -> bool:
        """Run the pending pass without waiting for the quiet interval."""

        if not self._attached:
            return False
        if self.scheduler.flush():
            return True
        self.scheduler.notify()
        return self.scheduler.flush()

    def _on_change(self, event: ChangeEvent) -> None:
        if event.phase is ChangePhase.AFTER:
            self.scheduler.notify()

    def _paint(self) -> None:
        if not self._attached:
            return
        text = self.host.get_text()
        try:
            with telemetry.span(
                "highlight::pass",
                logger_name=LOGGER_NAME,
                component="highlight",
                metadata={"language": self.rules.name, "length": len(text)},
            ) as handle:
                spans = tuple(self._tokenize(text, self.rules))
                painted = self.overlay.repaint(self.host, spans, self.palette.color_of)
                handle.add_metadata("spans", painted)
        except Exception as exc:
            # A failing host must not take the editor down with it.
            self.failures += 1
            telemetry.record_event(
                "highlight.failed",
                level="error",
                data={"language": self.rules.name, "error": repr(exc)},
                logger_name=LOGGER_NAME,
            )
            return
        self.last_spans = spans
        self.passes += 1


__all__ = ["Highlighter", "attached_highlighter"]
