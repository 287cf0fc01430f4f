"""Editor session: one history and one highlighter per host buffer."""

from __future__ import annotations

import time
from typing import Optional

from hilite_engine.buffer import BufferHost, BufferStats, HistoryManager, compute_stats
from hilite_engine.highlight import Highlighter, Palette
from hilite_engine.highlight.scheduler import Clock
from hilite_engine.rules import RuleSet, get_builtin, load_rule_set
from hilite_engine.runtime import EngineSettings, telemetry

LOGGER_NAME = "hilite_engine.session"


def resolve_rules(settings: EngineSettings) -> RuleSet:
    """Rule set named by the settings: a JSON file if given, else a built-in."""

    if settings.rules_file:
        return load_rule_set(settings.rules_file)
    return get_builtin(settings.language)


class EditorSession:
    """Wires history and highlighting to a host for the life of an editor.

    ``close`` detaches both; a closed session cannot be reopened.
    """

    def __init__(
        self,
        host: BufferHost,
        rules: Optional[RuleSet] = None,
        *,
        settings: Optional[EngineSettings] = None,
        palette: Optional[Palette] = None,
        clock: Clock = time.monotonic,
    ) -> None:
        self.host = host
        self.settings = settings or EngineSettings.from_env()
        self.palette = palette or Palette()
        self._clock = clock
        self.history = HistoryManager(host, max_stack_size=self.settings.history_limit)
        self.history.attach()
        self.highlighter = self._make_highlighter(rules or resolve_rules(self.settings))
        self.highlighter.attach()
        self._closed = False

    @property
    def rules(self) -> RuleSet:
        return self.highlighter.rules

    @property
    def closed(self) -> bool:
        return self._closed

    def use_rules(self, rules: RuleSet) -> Highlighter:
        """Switch languages by replacing the attached highlighter."""

        self._ensure_open()
        previous = self.highlighter
        previous.detach()
        self.highlighter = self._make_highlighter(rules)
        self.highlighter.attach()
        telemetry.record_event(
            "session.rules",
            data={"from": previous.rules.name, "to": rules.name},
            logger_name=LOGGER_NAME,
        )
        return self.highlighter

    def load_text(self, text: str) -> None:
        """Replace the whole buffer, e.g. after opening a file; history restarts."""

        self._ensure_open()
        self.host.set_text(text)
        self.host.set_selection(0, 0)
        self.history.clear_history()
        self.highlighter.refresh_now()

    def undo(self) -> bool:
        if self._closed:
            return False
        return self.history.undo()

    def redo(self) -> bool:
        if self._closed:
            return False
        return self.history.redo()

    def clear_history(self) -> None:
        if not self._closed:
            self.history.clear_history()

    def process_timeouts(self) -> bool:
        if self._closed:
            return False
        return self.highlighter.process_timeouts()

    def stats(self) -> BufferStats:
        return compute_stats(self.host.get_text())

    def close(self) -> None:
        if self._closed:
            return
        self.highlighter.detach()
        self.history.detach()
        self._closed = True
        telemetry.record_event("session.close", logger_name=LOGGER_NAME)

    def _make_highlighter(self, rules: RuleSet) -> Highlighter:
        return Highlighter(
            self.host,
            rules,
            self.palette,
            quiet_ms=self.settings.quiet_ms,
            clock=self._clock,
        )

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("Editor session is closed")


__all__ = ["EditorSession", "resolve_rules"]
