"""
elpais_pipeline/pipeline.py
---------------------------
Scrape → Translate → Analyse, on the driver carried by a RunContext.
"""

import logging

import config
from elpais_pipeline.analyzer import WordAnalyzer
from elpais_pipeline.errors import TranslationError
from elpais_pipeline.models import PipelineResult, RunContext
from elpais_pipeline.navigation import NavigationController
from elpais_pipeline.scraper import ArticleExtractor
from elpais_pipeline.translator import ArticleTranslator
from elpais_pipeline.waits import WaitEngine

logger = logging.getLogger(__name__)


def scrape(
    context: RunContext,
    base_url: str = config.BASE_URL,
    section_url: str = config.OPINION_URL,
    max_articles: int = config.NUM_ARTICLES,
    crawl_delay: tuple[float, float] = config.CRAWL_DELAY,
):
    """Reach the Opinion section and extract up to *max_articles* articles."""
    waits = WaitEngine(context)
    nav = NavigationController(context, waits)
    extractor = ArticleExtractor(context, waits, crawl_delay=crawl_delay)

    nav.open(base_url)
    nav.dismiss_consent(context.locator("cookie_button"))
    nav.check_language(context.locator("language"))
    nav.go_to_section(context.locator("opinion_nav"), section_url)
    nav.confirm_section(context.locator("opinion_header"), section_url)

    urls = extractor.collect_links(
        context.locator("all_articles"),
        context.locator("article_links"),
        max_articles,
        config.SECTION_SUBSTRING,
    )
    return extractor.extract_all(urls)


def translate_titles(articles, translator: ArticleTranslator) -> list[str]:
    """
    Translate every Spanish title in one batch and attach the results by
    position. Nothing is attached unless the whole batch succeeded.
    """
    titles_es = [a.title_es for a in articles]
    if not titles_es:
        logger.info("[Translations] No titles available to translate.")
        return []

    try:
        titles_en = translator.translate_batch(titles_es)
    except TranslationError as exc:
        logger.error("Translation step failed for %d title(s): %s", len(titles_es), exc)
        raise

    logger.info("=== Translations (Titles) ===")
    for i, (article, en) in enumerate(zip(articles, titles_en), start=1):
        article.title_en = en
        logger.info("%d. Original:   %s", i, article.title_es)
        logger.info("   Translated: %s", en)
    return titles_en


def run_pipeline(
    context: RunContext,
    translator: ArticleTranslator,
    analyzer: WordAnalyzer | None = None,
    **scrape_kwargs,
) -> PipelineResult:
    """
    Run the whole pipeline for one session. TranslationError propagates;
    articles extracted before it stay on `context.articles`.
    """
    analyzer = analyzer or WordAnalyzer()
    logger.info("PIPELINE START [%s]", context.session_name)

    articles = scrape(context, **scrape_kwargs)
    titles_en = translate_titles(articles, translator)
    repeated = analyzer.print_report(titles_en)

    logger.info("PIPELINE COMPLETE [%s]", context.session_name)
    return PipelineResult(articles=articles, repeated_words=repeated)


def print_summary(articles, label: str = "") -> None:
    print("\n" + "=" * 65)
    print(f"  ARTICLE SUMMARY {label}".rstrip())
    print("=" * 65)
    for i, art in enumerate(articles, start=1):
        print(f"\n  [{i}] {art.title_es}")
        print(f"       EN: {art.title_en or ''}")
        print(f"       Image: {art.image_path or art.image_url or 'N/A'}")
        print(f"       URL: {art.url}")
    print()
