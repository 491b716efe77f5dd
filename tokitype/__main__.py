from __future__ import annotations

import logging
import random
import sys
from pathlib import Path

from textual.logging import TextualHandler

from .app import TokitypeApp
from .corpus import load_corpus, sample_corpus
from .errors import TokitypeError
from .settings import config_path, load_config, settings_from_config


def main() -> None:
    logging.basicConfig(level=logging.INFO, handlers=[TextualHandler()])
    config = load_config()
    try:
        settings = settings_from_config(config)
        corpus_path = config.get("corpus")
        if corpus_path:
            # relative paths are taken from the config file's directory
            corpus = load_corpus(config_path().parent / Path(str(corpus_path)))
        else:
            corpus = sample_corpus()
        themes = config.get("themes")
        app = TokitypeApp(
            corpus,
            settings,
            rng=random.Random(config.get("seed")),
            theme_name=str(config.get("theme", "slate")),
            extra_themes=themes if isinstance(themes, dict) else None,
        )
    except TokitypeError as exc:
        print(f"tokitype: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    app.run()


if __name__ == "__main__":
    main()
