"""Integration tests chaining corpus loading, selection and a typed session."""

from __future__ import annotations

import json
import random
from pathlib import Path

import pytest

from tokitype.__main__ import main
from tokitype.corpus import load_corpus
from tokitype.diff import SpanKind, target_text
from tokitype.selector import select_phrase
from tokitype.session import Session
from tokitype.settings import settings_from_config

WORDS_TOML = """
[mi]
word = "mi"
usage_category = "core"
deprecated = false

[moku]
word = "moku"
usage_category = "core"
deprecated = false

[kili]
word = "kili"
usage_category = "common"
deprecated = false

[pake]
word = "pake"
usage_category = "obscure"
deprecated = true

[unu]
usage_category = "sandbox"
deprecated = false
"""


def test_typed_session_over_loaded_corpus(tmp_path: Path) -> None:
    path = tmp_path / "words.toml"
    path.write_text(WORDS_TOML, encoding="utf-8")
    settings = settings_from_config({"length": 3, "jitter": [1000, 1000]})

    phrase = select_phrase(load_corpus(path), settings, random.Random(0))
    assert phrase.words == ("mi", "moku", "kili")

    ticks = iter(float(n) for n in range(100))
    session = Session(phrase, clock=lambda: next(ticks))
    for char in "mi mok kili":
        session.push(char)
        assert target_text(session.spans) == phrase.text

    frame = session.frame()
    assert frame.finished
    assert [span.kind for span in frame.spans] == [
        SpanKind.CORRECT,
        SpanKind.SKIPPED,
        SpanKind.CORRECT,
    ]
    assert session.push(" ") is False
    assert frame.metrics.word_accuracy == 67
    assert frame.metrics.wpm == 60.0 * 3 / 10.0


def test_main_exits_on_corrupt_corpus(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    (tmp_path / "words.toml").write_text('[mi]\nword = "mi"\ndeprecated = false\n', encoding="utf-8")
    config = tmp_path / "tokitype.config.json"
    config.write_text(json.dumps({"corpus": "words.toml"}), encoding="utf-8")
    monkeypatch.setenv("TOKITYPE_CONFIG", str(config))

    with pytest.raises(SystemExit) as excinfo:
        main()

    assert excinfo.value.code == 1
    assert "missing usage_category" in capsys.readouterr().err
