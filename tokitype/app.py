from __future__ import annotations

import random
from typing import Dict, List, Mapping, Optional

try:
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import Container, Horizontal
    from textual.widgets import Static
except ModuleNotFoundError as exc:
    missing = getattr(exc, "name", "")
    hint = "python3 -m pip install -U rich textual"
    print(f"Missing dependency '{missing}'. Install with: {hint}")
    raise SystemExit(1) from exc

from .corpus import Corpus, CorpusRecord
from .diff import SpanKind
from .selector import select_phrase
from .session import Frame, KeyEvent, Session
from .settings import SelectionSettings

THEMES: Dict[str, Dict[str, str]] = {
    "slate": {
        "screen_bg": "transparent",
        "card_bg": "#111827",
        "stats_bg": "#0f172a",
        "prompt_bg": "#0b1220",
        "border": "#1f2937",
        "title": "#e5e7eb",
        "muted": "#64748b",
        "hint": "#93c5fd",
        "correct": "#86efac",
        "wrong": "#fb7185",
        "overflow": "#fde047",
        "skipped": "#fca5a5",
        "hidden": "#cbd5e1",
        "bar_fg": "#60a5fa",
        "bar_bg": "#1e293b",
    },
    "ember": {
        "screen_bg": "transparent",
        "card_bg": "#1f140f",
        "stats_bg": "#21140e",
        "prompt_bg": "#1a1210",
        "border": "#3b1d14",
        "title": "#fef3c7",
        "muted": "#d6a08a",
        "hint": "#fbbf24",
        "correct": "#fde68a",
        "wrong": "#f87171",
        "overflow": "#fb923c",
        "skipped": "#fca5a5",
        "hidden": "#f3e8e1",
        "bar_fg": "#f97316",
        "bar_bg": "#3b1d14",
    },
    "mint": {
        "screen_bg": "transparent",
        "card_bg": "#0b1f24",
        "stats_bg": "#0b1c22",
        "prompt_bg": "#0a1b1f",
        "border": "#12323a",
        "title": "#d1fae5",
        "muted": "#7dd3c7",
        "hint": "#5eead4",
        "correct": "#5eead4",
        "wrong": "#fb7185",
        "overflow": "#facc15",
        "skipped": "#fda4af",
        "hidden": "#c7f9f1",
        "bar_fg": "#34d399",
        "bar_bg": "#12323a",
    },
}

# stats refresh period, so the clock moves without input
TICK_SECONDS = 0.05


# ---------------------------
# UI widgets
# ---------------------------

class StatsBar(Static):
    """Live stats line."""


class WordCard(Static):
    """Dictionary entry for a word near the cursor."""


class PromptView(Static):
    """Phrase rendered as classified spans."""


class HelpBar(Static):
    """Help / controls."""


# ---------------------------
# App
# ---------------------------

class TokitypeApp(App):
    CSS = """
    Screen {
        background: transparent;
    }

    #root {
        height: 100%;
        padding: 1 2;
    }

    StatsBar {
        background: #0f172a;
        border: round #1f2937;
        padding: 0 2;
        height: 5;
    }

    #cards {
        height: 1fr;
    }

    WordCard {
        background: #111827;
        border: round #1f2937;
        padding: 0 2;
        width: 1fr;
        height: 100%;
    }

    PromptView {
        background: #0b1220;
        border: round #1f2937;
        padding: 1 2;
        height: 3fr;
    }

    HelpBar {
        background: #0f172a;
        border: round #1f2937;
        padding: 0 2;
        height: 3;
    }
    """

    TITLE = "tokitype"

    BINDINGS = [
        Binding("escape", "quit_session", "Quit", priority=True),
        Binding("ctrl+q", "quit_session", "Quit", priority=True),
        Binding("ctrl+c", "quit_session", "Quit", show=False, priority=True),
        Binding("ctrl+d", "quit_session", "Quit", show=False, priority=True),
        Binding("ctrl+r", "restart", "Restart", priority=True),
        Binding("ctrl+t", "cycle_theme", "Theme", priority=True),
    ]

    def __init__(
        self,
        corpus: Corpus,
        selection_settings: SelectionSettings,
        rng: Optional[random.Random] = None,
        theme_name: str = "slate",
        extra_themes: Optional[Mapping[str, Mapping[str, str]]] = None,
    ) -> None:
        super().__init__()
        self.corpus = corpus
        self.selection_settings = selection_settings
        self.rng = rng or random.Random()
        self.palettes = THEMES.copy()
        for name, colors in (extra_themes or {}).items():
            self.palettes[name] = {**self.palettes["slate"], **colors}
        self.theme_name = theme_name if theme_name in self.palettes else "slate"
        self.palette = self.palettes[self.theme_name]
        # built here so corpus errors surface before the screen is taken over
        self.session = self._new_session()

    def _new_session(self) -> Session:
        return Session(select_phrase(self.corpus, self.selection_settings, self.rng))

    def compose(self) -> ComposeResult:
        with Container(id="root"):
            self.stats_bar = StatsBar()
            self.current_card = WordCard()
            self.next_card = WordCard()
            self.prompt_view = PromptView()
            self.help_bar = HelpBar()
            yield self.stats_bar
            with Horizontal(id="cards"):
                yield self.current_card
                yield self.next_card
            yield self.prompt_view
            yield self.help_bar

    def on_mount(self) -> None:
        self.apply_theme()
        self._report_shortfall()
        self._render_all()
        self.set_interval(TICK_SECONDS, self._tick)

    def apply_theme(self) -> None:
        palette = self.palette
        self.screen.styles.background = palette["screen_bg"]
        self.stats_bar.styles.background = palette["stats_bg"]
        self.help_bar.styles.background = palette["stats_bg"]
        self.prompt_view.styles.background = palette["prompt_bg"]
        border_def = (("round", palette["border"]),)
        for widget in (self.stats_bar, self.help_bar, self.prompt_view, self.current_card, self.next_card):
            widget.styles.border = border_def
        for card in (self.current_card, self.next_card):
            card.styles.background = palette["card_bg"]

    def _report_shortfall(self) -> None:
        phrase = self.session.phrase
        if phrase.shortfall:
            self.notify(
                f"Only {len(phrase)} of {phrase.requested} words available.",
                severity="warning",
            )

    def _tick(self) -> None:
        if self.session.started_at is None or self.session.finished:
            return
        self._render_stats(self.session.frame())

    # ---------------------------
    # Input
    # ---------------------------

    def on_key(self, event: events.Key) -> None:
        if event.key == "backspace":
            key = KeyEvent.delete()
        elif event.is_printable and event.character:
            key = KeyEvent.insert(event.character)
        else:
            return
        event.stop()
        self._dispatch(key)

    def _dispatch(self, key: KeyEvent) -> None:
        if not self.session.apply(key):
            self.exit()
            return
        self._render_all()

    def action_quit_session(self) -> None:
        self._dispatch(KeyEvent.quit())

    def action_restart(self) -> None:
        self.session = self._new_session()
        self._report_shortfall()
        self._render_all()

    def action_cycle_theme(self) -> None:
        names = list(self.palettes.keys())
        self.theme_name = names[(names.index(self.theme_name) + 1) % len(names)]
        self.palette = self.palettes[self.theme_name]
        self.apply_theme()
        self._render_all()

    # ---------------------------
    # Rendering
    # ---------------------------

    def _render_all(self) -> None:
        frame = self.session.frame()
        self._render_stats(frame)
        self._render_cards(frame)
        self._render_prompt(frame)
        self._render_help(frame)

    def _span_style(self, kind: SpanKind) -> str:
        theme = self.palette
        styles = {
            SpanKind.CORRECT: theme["correct"],
            SpanKind.WRONG: f"bold underline {theme['wrong']}",
            SpanKind.OVERFLOW: theme["overflow"],
            SpanKind.SKIPPED: theme["skipped"],
            SpanKind.HIDDEN: theme["hidden"],
        }
        return styles[kind]

    def _render_prompt(self, frame: Frame) -> None:
        text = Text()
        for span in frame.spans:
            text.append(span.display, style=self._span_style(span.kind))
        self.prompt_view.update(text)

    def _card_lines(self, record: CorpusRecord) -> List[str]:
        lines = []
        if record.definition:
            lines.append(f"DEFINITION {record.definition}")
            lines.append("")
        example = record.example(self.selection_settings.language)
        if example:
            lines.append(example)
            lines.append("")
        if record.ku_data:
            lines.append("KU DATA " + " ".join(record.ku_data))
        return lines

    def _render_cards(self, frame: Frame) -> None:
        theme = self.palette
        for card, record in ((self.current_card, frame.current_word), (self.next_card, frame.next_word)):
            if record is None:
                card.border_title = ""
                card.update("")
                continue
            card.border_title = record.word
            text = Text()
            for line in self._card_lines(record):
                text.append(line + "\n", style=theme["title"])
            card.update(text)

    def _render_stats(self, frame: Frame) -> None:
        theme = self.palette
        metrics = frame.metrics
        elapsed = metrics.elapsed or 0.0
        done = self.session.words_completed()
        total = len(self.session.phrase)

        bar_len = 34
        filled = 0 if total == 0 else int(bar_len * done / total)

        text = Text()
        text.append("Time ", style=theme["muted"])
        text.append(f"{int(elapsed) // 60:02d}:{int(elapsed) % 60:02d}", style=f"bold {theme['title']}")
        text.append("  ", style=theme["muted"])
        text.append(f"{done}/{total} words", style=theme["bar_fg"])
        text.append("\n", style="")
        text.append("[", style=theme["muted"])
        text.append("=" * filled, style=theme["bar_fg"])
        text.append("." * (bar_len - filled), style=theme["bar_bg"])
        text.append("]", style=theme["muted"])
        text.append("\n", style="")
        text.append("WPM ", style=theme["muted"])
        wpm = "--" if metrics.wpm is None else f"{metrics.wpm:.1f}"
        text.append(f"{wpm:>5}", style=f"bold {theme['title']}")
        text.append("   ", style=theme["muted"])
        text.append("Chars ", style=theme["muted"])
        text.append(_percent_label(metrics.char_accuracy), style=f"bold {theme['title']}")
        text.append("   ", style=theme["muted"])
        text.append("Words ", style=theme["muted"])
        text.append(_percent_label(metrics.word_accuracy), style=f"bold {theme['title']}")
        self.stats_bar.update(text)

    def _render_help(self, frame: Frame) -> None:
        theme = self.palette
        text = Text()
        if frame.metrics.started_at is None:
            text.append("Start typing to begin. ", style=theme["hint"])
        elif frame.finished:
            text.append("Done. ", style=theme["hint"])
        text.append("Ctrl+R restart", style=theme["hint"])
        text.append("  ", style=theme["muted"])
        text.append("Ctrl+T theme", style=theme["hint"])
        text.append("  ", style=theme["muted"])
        text.append("Esc quit", style=theme["hint"])
        self.help_bar.update(text)


def _percent_label(value: Optional[int]) -> str:
    return "--" if value is None else f"{value:>3}%"
