"""
main.py
-------
Local entry point — runs the full pipeline on your machine in a single
local browser (Chrome by default, see BROWSER in config.py).

Usage:
    python main.py
"""

import config
from elpais_pipeline.analyzer import WordAnalyzer
from elpais_pipeline.drivers import provision, release
from elpais_pipeline.logging_utils import setup_logging
from elpais_pipeline.models import RunContext
from elpais_pipeline.pipeline import print_summary, run_pipeline
from elpais_pipeline.translator import ArticleTranslator


def main() -> int:
    setup_logging(config.LOG_LEVEL, config.LOG_FILE or None)

    # Fail before a browser is started if the translation key is missing
    translator = ArticleTranslator()
    label = f"{config.LOCAL_BROWSER.title()} (local)"

    context = RunContext(handle=provision("local"), session_name=label)
    try:
        result = run_pipeline(context, translator, WordAnalyzer())
        print_summary(result.articles, f"[{label}]")
    finally:
        release(context)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
