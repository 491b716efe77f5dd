"""Terminal typing trainer over a weighted selection of dictionary words."""

from .corpus import Corpus, CorpusRecord, UsageCategory, load_corpus, sample_corpus
from .diff import Span, SpanKind, compute_spans
from .errors import CorpusError, NoWordsAvailableError, SettingsError, TokitypeError
from .selector import TargetPhrase, select_phrase
from .session import Frame, KeyEvent, KeyKind, Session
from .settings import SelectionSettings

__all__ = [
    "Corpus",
    "CorpusError",
    "CorpusRecord",
    "Frame",
    "KeyEvent",
    "KeyKind",
    "NoWordsAvailableError",
    "SelectionSettings",
    "Session",
    "SettingsError",
    "Span",
    "SpanKind",
    "TargetPhrase",
    "TokitypeError",
    "UsageCategory",
    "compute_spans",
    "load_corpus",
    "sample_corpus",
    "select_phrase",
]
