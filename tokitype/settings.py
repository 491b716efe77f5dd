from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Optional, Tuple

from .corpus import UsageCategory
from .errors import CorpusError, SettingsError

logger = logging.getLogger(__name__)

DEFAULT_WORD_WEIGHT = 1000
DEFAULT_LENGTH = 60
DEFAULT_JITTER = (900, 1100)

CONFIG_ENV = "TOKITYPE_CONFIG"
CONFIG_NAME = "tokitype.config.json"


@dataclass(frozen=True)
class SelectionSettings:
    """Weights used to order the corpus before a phrase is cut from it.

    Every weight is a cost: records with a larger product sort later and so
    are less likely to be picked.
    """

    core: int = DEFAULT_WORD_WEIGHT
    common: int = DEFAULT_WORD_WEIGHT * 200
    uncommon: int = DEFAULT_WORD_WEIGHT * 400
    obscure: int = DEFAULT_WORD_WEIGHT * 600
    sandbox: int = DEFAULT_WORD_WEIGHT * 800
    deprecated: int = DEFAULT_WORD_WEIGHT * 800
    nondeprecated: int = DEFAULT_WORD_WEIGHT
    # per-word overrides keyed by record id
    words: Mapping[str, int] = field(default_factory=dict)
    length: int = DEFAULT_LENGTH
    # permille bounds, inclusive
    jitter: Tuple[int, int] = DEFAULT_JITTER
    language: str = "en"

    def __post_init__(self) -> None:
        for name in ("core", "common", "uncommon", "obscure", "sandbox", "deprecated", "nondeprecated"):
            _check_weight(name, getattr(self, name))
        for word_id, weight in self.words.items():
            _check_weight(f"words[{word_id!r}]", weight)
        object.__setattr__(self, "words", MappingProxyType(dict(self.words)))

        if not _is_int(self.length) or self.length < 1:
            raise SettingsError(f"length must be a positive integer, got {self.length!r}")

        low, high = self.jitter
        if not (_is_int(low) and _is_int(high)) or low < 1 or high < low:
            raise SettingsError(f"jitter must be a non-empty positive range, got {self.jitter!r}")
        object.__setattr__(self, "jitter", (low, high))

    def category_weight(self, category: UsageCategory) -> int:
        weights = {
            UsageCategory.CORE: self.core,
            UsageCategory.COMMON: self.common,
            UsageCategory.UNCOMMON: self.uncommon,
            UsageCategory.OBSCURE: self.obscure,
            UsageCategory.SANDBOX: self.sandbox,
        }
        try:
            return weights[category]
        except KeyError as exc:
            raise CorpusError(f"no weight configured for usage category {category!r}") from exc

    def word_weight(self, word_id: str) -> int:
        return self.words.get(word_id, DEFAULT_WORD_WEIGHT)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_weight(name: str, value: object) -> None:
    if not _is_int(value) or value < 1:
        raise SettingsError(f"{name} weight must be a positive integer, got {value!r}")


# ---------------------------
# Config file
# ---------------------------

def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV)
    if override:
        return Path(override)
    return Path(__file__).resolve().parent / CONFIG_NAME


def load_config(path: Optional[Path] = None) -> Dict[str, object]:
    path = path or config_path()
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring config %s: top level is not an object", path)
        return {}
    return data


def settings_from_config(config: Mapping[str, object]) -> SelectionSettings:
    kwargs: Dict[str, object] = {}

    weights = config.get("weights", {})
    if not isinstance(weights, Mapping):
        raise SettingsError("weights must be an object")
    known = {category.value for category in UsageCategory} | {"deprecated", "nondeprecated"}
    for name, value in weights.items():
        if name not in known:
            raise SettingsError(f"unknown weight {name!r}")
        kwargs[name] = value

    words = config.get("words", {})
    if not isinstance(words, Mapping):
        raise SettingsError("words must be an object of word id to weight")
    kwargs["words"] = dict(words)

    if "length" in config:
        kwargs["length"] = config["length"]
    if "jitter" in config:
        jitter = config["jitter"]
        if not isinstance(jitter, (list, tuple)) or len(jitter) != 2:
            raise SettingsError("jitter must be a [low, high] pair")
        kwargs["jitter"] = tuple(jitter)
    if "language" in config:
        kwargs["language"] = str(config["language"])

    return SelectionSettings(**kwargs)
