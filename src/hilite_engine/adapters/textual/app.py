"""Executable Textual app hosting the highlighter and history engine."""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the demo runs
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import Horizontal
    from textual.widgets import Footer, Header, Static, TextArea
    from textual.widgets.text_area import Selection
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use hilite_engine.adapters.textual.app"
    ) from exc

from hilite_engine.buffer.host import ChangePhase
from hilite_engine.rules import RuleSet, builtin_names, get_builtin, load_rule_set
from hilite_engine.runtime import EngineSettings, telemetry
from hilite_engine.session import EditorSession

from .controller import ChangeHook, Location, TextualBufferHost

SAMPLE_TEXT = '''// Sample buffer: edit freely, ctrl+z / ctrl+y to undo / redo
@Suppress("unused")
fun greet(name: String, times: Int = 3): String {
    val banner = """
        if (x) 1
    """
    /* 0x1F_FF and 1.5e3 inside a comment stay gray */
    return "Hello, $name \\"${times}\\"" + 42L
}
'''


class HostTextArea(TextArea):
    """``TextArea`` that reports every edit before and after it lands."""

    change_hook: Optional[ChangeHook] = None

    def edit(self, edit):  # type: ignore[override]
        hook = self.change_hook
        if hook is not None:
            hook(ChangePhase.BEFORE, self.text)
        result = super().edit(edit)
        if hook is not None:
            hook(ChangePhase.AFTER, self.text)
        return result

    def select_locations(self, start: Location, end: Location) -> None:
        self.selection = Selection(start, end)


class HiliteEditorApp(App[None]):
    """Editable buffer on the left, painted preview on the right."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#panes {
		height: 1fr;
	}

	#editor {
		width: 1fr;
	}

	#preview {
		width: 1fr;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        Binding("ctrl+z", "undo", "Undo", priority=True),
        Binding("ctrl+y", "redo", "Redo", priority=True),
        Binding("ctrl+l", "cycle_language", "Language", priority=True),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        settings: Optional[EngineSettings] = None,
        rules: Optional[RuleSet] = None,
        text: str = SAMPLE_TEXT,
    ) -> None:
        super().__init__()
        self.settings = settings or EngineSettings.from_env()
        self._initial_rules = rules
        self._initial_text = text
        self.host: TextualBufferHost | None = None
        self.session: EditorSession | None = None
        self._preview: Static | None = None
        self._status: Static | None = None
        self._seen_revision = -1

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="panes"):
            yield HostTextArea(self._initial_text, id="editor")
            self._preview = Static("", id="preview")
            yield self._preview
        self._status = Static("", id="status-line")
        yield self._status
        yield Footer()

    def on_mount(self) -> None:
        editor = self.query_one("#editor", HostTextArea)
        self.host = TextualBufferHost(editor)
        self.session = EditorSession(
            self.host, self._initial_rules, settings=self.settings
        )
        editor.focus()
        self.set_interval(0.05, self._tick)

    def on_unmount(self) -> None:
        if self.session:
            self.session.close()
            self.session = None

    def action_undo(self) -> None:
        if self.session:
            self.session.undo()

    def action_redo(self) -> None:
        if self.session:
            self.session.redo()

    def action_cycle_language(self) -> None:
        if not self.session:
            return
        names = builtin_names()
        current = self.session.rules.name
        index = names.index(current) if current in names else -1
        self.session.use_rules(get_builtin(names[(index + 1) % len(names)]))

    def _tick(self) -> None:
        if not self.session or not self.host:
            return
        self.session.process_timeouts()
        if self.host.revision != self._seen_revision:
            self._seen_revision = self.host.revision
            if self._preview:
                self._preview.update(self.host.styled_text())
        self._update_status()

    def _update_status(self) -> None:
        if not self.session or not self._status:
            return
        history = self.session.history
        self._status.update(
            f"{self.session.rules.name} | {self.session.stats().summary()}"
            f" | undo {history.undo_depth} / redo {history.redo_depth}"
        )


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the highlighting editor demo.")
    parser.add_argument(
        "--language",
        choices=builtin_names(),
        default=None,
        help="Built-in language (default: HILITE_ENGINE_LANGUAGE or kotlin)",
    )
    parser.add_argument(
        "--rules",
        default=None,
        help="JSON language definition to use instead of a built-in",
    )
    parser.add_argument(
        "--quiet-ms",
        type=int,
        default=None,
        help="Milliseconds of quiet before re-highlighting",
    )
    parser.add_argument(
        "--history-limit",
        type=int,
        default=None,
        help="Maximum undo snapshots kept",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "quiet", "production"),
        default=None,
        help="telelog preset to use instead of the HILITE_ENGINE_LOG_* variables",
    )
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> EngineSettings:
    settings = EngineSettings.from_env()
    changes = {}
    if args.language:
        changes["language"] = args.language
    if args.rules:
        changes["rules_file"] = args.rules
    if args.quiet_ms is not None:
        changes["quiet_ms"] = args.quiet_ms
    if args.history_limit is not None:
        changes["history_limit"] = args.history_limit
    return replace(settings, **changes) if changes else settings


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    settings = build_settings(args)
    rules = load_rule_set(settings.rules_file) if settings.rules_file else None
    HiliteEditorApp(settings=settings, rules=rules).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
