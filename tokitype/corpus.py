from __future__ import annotations

import bz2
import logging
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Optional, Tuple, Union

from .errors import CorpusError

logger = logging.getLogger(__name__)


class UsageCategory(Enum):
    CORE = "core"
    COMMON = "common"
    UNCOMMON = "uncommon"
    OBSCURE = "obscure"
    SANDBOX = "sandbox"


@dataclass(frozen=True)
class CorpusRecord:
    id: str
    usage_category: UsageCategory
    deprecated: bool
    word: Optional[str] = None
    definition: Optional[str] = None
    # example sentences keyed by language tag
    examples: Mapping[str, str] = field(default_factory=dict)
    ku_data: Tuple[str, ...] = ()

    def example(self, language: str) -> Optional[str]:
        return self.examples.get(language)


class Corpus(Mapping):
    """Read-only mapping from word identifier to its record.

    Iteration follows load order, which the selector relies on to break
    weight ties deterministically.
    """

    def __init__(self, records: Iterable[CorpusRecord]) -> None:
        table: Dict[str, CorpusRecord] = {}
        for record in records:
            if record.id in table:
                raise CorpusError(f"duplicate word id {record.id!r}")
            table[record.id] = record
        self._records = MappingProxyType(table)

    def __getitem__(self, key: str) -> CorpusRecord:
        return self._records[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"Corpus({len(self)} records)"


# ---------------------------
# Record parsing
# ---------------------------

def record_from_table(key: str, table: Mapping[str, object]) -> CorpusRecord:
    """Build a record from one parsed metadata table.

    ``usage_category`` and ``deprecated`` are required; anything else is
    optional. A record with no usable ``word`` is kept, the selector skips it.
    """
    if not isinstance(table, Mapping):
        raise CorpusError(f"{key}: expected a table, got {type(table).__name__}")

    raw_category = table.get("usage_category")
    if raw_category is None:
        raise CorpusError(f"{key}: missing usage_category")
    try:
        category = UsageCategory(raw_category)
    except ValueError as exc:
        raise CorpusError(f"{key}: unknown usage_category {raw_category!r}") from exc

    deprecated = table.get("deprecated")
    if not isinstance(deprecated, bool):
        raise CorpusError(f"{key}: missing or non-boolean deprecated flag")

    word = table.get("word")
    definition = table.get("definition")
    verbatim = table.get("pu_verbatim")
    examples = {}
    if isinstance(verbatim, Mapping):
        examples = {lang: text for lang, text in verbatim.items() if isinstance(text, str)}
    ku = table.get("ku_data")

    return CorpusRecord(
        id=key,
        usage_category=category,
        deprecated=deprecated,
        word=word if isinstance(word, str) and word else None,
        definition=definition.strip() if isinstance(definition, str) else None,
        examples=MappingProxyType(examples),
        ku_data=tuple(ku) if isinstance(ku, Mapping) else (),
    )


def records_from_mapping(data: Mapping[str, Mapping[str, object]]) -> Corpus:
    return Corpus(record_from_table(key, table) for key, table in data.items())


# ---------------------------
# Loading
# ---------------------------

def _read_toml(path: Path) -> Dict[str, object]:
    try:
        if path.suffix == ".bz2":
            raw = bz2.decompress(path.read_bytes()).decode("utf-8")
        else:
            raw = path.read_text(encoding="utf-8")
        return tomllib.loads(raw)
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        raise CorpusError(f"failed to read corpus file {path}: {exc}") from exc


def _load_metadata_dir(directory: Path) -> Corpus:
    records = []
    for path in sorted(directory.glob("*.toml")):
        table = _read_toml(path)
        key = table.get("id")
        if not isinstance(key, str) or not key:
            raise CorpusError(f"{path.name}: missing id")
        records.append(record_from_table(key, table))
    return Corpus(records)


def load_corpus(path: Union[str, Path]) -> Corpus:
    """Load a corpus from ``words.toml``, ``words.toml.bz2`` or a directory
    of per-word metadata files."""
    path = Path(path)
    if path.is_dir():
        corpus = _load_metadata_dir(path)
    else:
        corpus = records_from_mapping(_read_toml(path))
    logger.info("loaded %d corpus records from %s", len(corpus), path)
    return corpus


# ---------------------------
# Bundled sample (offline)
# ---------------------------

SAMPLE_WORDS: Dict[str, Dict[str, object]] = {
    "mi": {"word": "mi", "usage_category": "core", "deprecated": False,
           "definition": "I, me, we, us",
           "pu_verbatim": {"en": "PRONOUN I, me, we, us"},
           "ku_data": {"I": 100, "me": 81, "we": 47}},
    "sina": {"word": "sina", "usage_category": "core", "deprecated": False,
             "definition": "you",
             "pu_verbatim": {"en": "PRONOUN you"},
             "ku_data": {"you": 100}},
    "ona": {"word": "ona", "usage_category": "core", "deprecated": False,
            "definition": "he, she, it, they",
            "ku_data": {"he": 100, "she": 100, "it": 100, "they": 98}},
    "jan": {"word": "jan", "usage_category": "core", "deprecated": False,
            "definition": "human being, person, somebody",
            "ku_data": {"person": 100, "people": 73, "human": 50}},
    "toki": {"word": "toki", "usage_category": "core", "deprecated": False,
             "definition": "communicate, say, think; conversation, story, language",
             "pu_verbatim": {"en": "VERB to communicate, say, speak, talk, use language, think"},
             "ku_data": {"language": 100, "talk": 78, "speak": 72}},
    "pona": {"word": "pona", "usage_category": "core", "deprecated": False,
             "definition": "good, positive, useful; friendly, peaceful; simple",
             "pu_verbatim": {"en": "ADJECTIVE good, positive, useful; friendly, peaceful; simple"},
             "ku_data": {"good": 100, "simple": 56, "fix": 22}},
    "ike": {"word": "ike", "usage_category": "core", "deprecated": False,
            "definition": "bad, negative; non-essential, irrelevant",
            "ku_data": {"bad": 100, "evil": 38}},
    "moku": {"word": "moku", "usage_category": "core", "deprecated": False,
             "definition": "to eat, drink, consume, swallow, ingest",
             "ku_data": {"food": 100, "eat": 98}},
    "telo": {"word": "telo", "usage_category": "core", "deprecated": False,
             "definition": "water, liquid, fluid, wet substance; beverage",
             "ku_data": {"water": 100, "liquid": 82}},
    "tomo": {"word": "tomo", "usage_category": "core", "deprecated": False,
             "definition": "indoor space; building, home, house, room",
             "ku_data": {"house": 100, "home": 82, "room": 40}},
    "ma": {"word": "ma", "usage_category": "core", "deprecated": False,
           "definition": "earth, land; outdoors, world; country, territory; soil",
           "ku_data": {"land": 100, "country": 66, "earth": 58}},
    "sona": {"word": "sona", "usage_category": "core", "deprecated": False,
             "definition": "knowledge, wisdom, intelligence, understanding",
             "ku_data": {"know": 100, "knowledge": 75}},
    "lukin": {"word": "lukin", "usage_category": "core", "deprecated": False,
              "definition": "eye; look, see, examine, observe, read, watch",
              "ku_data": {"see": 100, "look": 97}},
    "pilin": {"word": "pilin", "usage_category": "core", "deprecated": False,
              "definition": "heart (physical or emotional); feeling",
              "ku_data": {"feel": 100, "heart": 58}},
    "suli": {"word": "suli", "usage_category": "core", "deprecated": False,
             "definition": "big, heavy, large, long, tall; important; adult",
             "ku_data": {"big": 100, "important": 57}},
    "lili": {"word": "lili", "usage_category": "core", "deprecated": False,
             "definition": "small, short, young; a bit",
             "ku_data": {"small": 100, "little": 91}},
    "tawa": {"word": "tawa", "usage_category": "core", "deprecated": False,
             "definition": "going to, toward; for; from the perspective of; moving",
             "ku_data": {"to": 100, "go": 89}},
    "kama": {"word": "kama", "usage_category": "core", "deprecated": False,
             "definition": "arriving, coming, future, summoned",
             "ku_data": {"come": 100, "become": 67}},
    "wile": {"word": "wile", "usage_category": "core", "deprecated": False,
             "definition": "must, need, require, should, want, wish",
             "ku_data": {"want": 100, "need": 81}},
    "nimi": {"word": "nimi", "usage_category": "core", "deprecated": False,
             "definition": "name, word",
             "ku_data": {"word": 100, "name": 98}},
    "pali": {"word": "pali", "usage_category": "core", "deprecated": False,
             "definition": "do, take action on, work on; build, make, prepare",
             "ku_data": {"work": 100, "do": 73, "make": 62}},
    "tenpo": {"word": "tenpo", "usage_category": "core", "deprecated": False,
              "definition": "time, duration, moment, occasion, period, situation",
              "ku_data": {"time": 100}},
    "nasin": {"word": "nasin", "usage_category": "core", "deprecated": False,
              "definition": "way, custom, doctrine, method, path, road",
              "ku_data": {"way": 100, "path": 65}},
    "musi": {"word": "musi", "usage_category": "core", "deprecated": False,
             "definition": "artistic, entertaining, frivolous, playful, recreational",
             "ku_data": {"fun": 100, "game": 90}},
    "lape": {"word": "lape", "usage_category": "core", "deprecated": False,
             "definition": "sleeping, resting",
             "ku_data": {"sleep": 100, "rest": 63}},
    "kin": {"word": "kin", "usage_category": "common", "deprecated": False,
            "definition": "too, also, as well, additionally",
            "ku_data": {"also": 100, "too": 78}},
    "oko": {"word": "oko", "usage_category": "common", "deprecated": False,
            "definition": "eye",
            "ku_data": {"eye": 100}},
    "monsuta": {"word": "monsuta", "usage_category": "common", "deprecated": False,
                "definition": "fear, dread; monster, predator; threat, danger",
                "ku_data": {"monster": 100, "fear": 82}},
    "tonsi": {"word": "tonsi", "usage_category": "common", "deprecated": False,
              "definition": "non-binary, gender non-conforming, genderqueer",
              "ku_data": {"nonbinary": 100}},
    "namako": {"word": "namako", "usage_category": "common", "deprecated": False,
               "definition": "spice, embellishment, something extra",
               "ku_data": {"spice": 100, "extra": 62}},
    "epiku": {"word": "epiku", "usage_category": "uncommon", "deprecated": False,
              "definition": "epic, cool, awesome, amazing",
              "ku_data": {"epic": 100, "cool": 61}},
    "jasima": {"word": "jasima", "usage_category": "uncommon", "deprecated": False,
               "definition": "reflect, echo, mirror; opposite",
               "ku_data": {"mirror": 100, "reflect": 89}},
    "lanpan": {"word": "lanpan", "usage_category": "uncommon", "deprecated": False,
               "definition": "take, seize, catch, receive, get",
               "ku_data": {"take": 100, "get": 67}},
    "kijetesantakalu": {"word": "kijetesantakalu", "usage_category": "uncommon",
                        "deprecated": False,
                        "definition": "any animal from the Procyonidae family",
                        "ku_data": {"raccoon": 100}},
    "pake": {"word": "pake", "usage_category": "obscure", "deprecated": True,
             "definition": "stop, cease, block, prevent",
             "ku_data": {"stop": 100, "block": 57}},
    "apeja": {"word": "apeja", "usage_category": "obscure", "deprecated": True,
              "definition": "shame, guilt, embarrassment",
              "ku_data": {"shame": 100}},
    "kiki": {"word": "kiki", "usage_category": "obscure", "deprecated": False,
             "definition": "spiky, sharp, angular, pointy"},
    "linluwi": {"word": "linluwi", "usage_category": "obscure", "deprecated": False,
                "definition": "network, internet, connection"},
    "unu": {"word": "unu", "usage_category": "sandbox", "deprecated": False,
            "definition": "purple"},
    "sutopatikuna": {"word": "sutopatikuna", "usage_category": "sandbox", "deprecated": False,
                     "definition": "platypus"},
}


def sample_corpus() -> Corpus:
    return records_from_mapping(SAMPLE_WORDS)
