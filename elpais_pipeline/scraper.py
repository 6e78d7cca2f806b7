"""
elpais_pipeline/scraper.py
--------------------------
ArticleExtractor — collects Opinion article links from the listing page and
visits each one for its title, first paragraph and cover image.

Design decisions:
  - Works on whatever driver the RunContext carries (local or BrowserStack)
  - Each article is processed inside its own error boundary; one broken page
    is logged and skipped, the rest of the batch still runs
  - Missing elements are normal: a missing title gives "", a missing image
    leaves image_url as None
"""

import logging
import random
import time

from selenium.common.exceptions import StaleElementReferenceException, WebDriverException
from selenium.webdriver.common.by import By

import config
from elpais_pipeline.downloader import save_image
from elpais_pipeline.errors import ArticleExtractionError
from elpais_pipeline.models import Article, RunContext
from elpais_pipeline.waits import WaitEngine

logger = logging.getLogger(__name__)


def first_non_blank(*candidates: str | None) -> str | None:
    for value in candidates:
        if value is not None and value.strip():
            return value
    return None


def last_srcset_candidate(srcset: str | None) -> str | None:
    """URL of the last entry in a responsive `srcset` list ("url 640w, url 1280w")."""
    if not srcset or not srcset.strip():
        return None
    last = srcset.split(",")[-1].strip()
    return last.split()[0] if last else None


def resolve_image_url(img) -> str | None:
    """
    Pick the image URL from an <img> element, in this order:
    src → data-src / data-lazy-src → last srcset candidate.
    """
    url = first_non_blank(img.get_attribute("src"))
    if url is None:
        url = first_non_blank(img.get_attribute("data-src"), img.get_attribute("data-lazy-src"))
    if url is None:
        url = last_srcset_candidate(img.get_attribute("srcset"))
    return url


class ArticleExtractor:
    """Scrapes Opinion articles: title, first paragraph (logged) and cover image."""

    def __init__(
        self,
        context: RunContext,
        waits: WaitEngine | None = None,
        saver=save_image,
        crawl_delay: tuple[float, float] = config.CRAWL_DELAY,
    ):
        """
        Args:
            context:     Per-run state (driver handle, locators, timeouts).
            waits:       Shared WaitEngine; one is built from *context* if omitted.
            saver:       Image persistence callable `(url, dest_dir) -> path | None`.
            crawl_delay: (min, max) seconds to pause between article visits.
        """
        self.context = context
        self.waits = waits or WaitEngine(context)
        self.saver = saver
        self.crawl_delay = crawl_delay

    @property
    def driver(self):
        return self.context.driver

    # ── URL collection ────────────────────────────────────────────────────────

    def count_listing(self, listing_locator: str) -> int:
        count = len(self.driver.find_elements(By.XPATH, listing_locator))
        logger.info("[Articles] entries found on listing page: %d", count)
        return count

    def collect_links(
        self,
        listing_locator: str,
        link_locator: str,
        max_count: int,
        section_substring: str,
    ) -> list[str]:
        """
        Return up to *max_count* distinct hrefs containing *section_substring*,
        in the order the links appear on the page.
        """
        self.count_listing(listing_locator)
        links: list[str] = []
        if max_count <= 0:
            return links

        for el in self.driver.find_elements(By.XPATH, link_locator):
            try:
                href = el.get_attribute("href")
            except StaleElementReferenceException:
                continue
            if href and section_substring in href and href not in links:
                links.append(href)
                if len(links) >= max_count:
                    break

        logger.info("[Links] Storing first %d article URL(s):", len(links))
        for i, href in enumerate(links, start=1):
            logger.info("  %d) %s", i, href)
        return links

    # ── Per-article scraping ──────────────────────────────────────────────────

    def extract_article(self, url: str) -> Article:
        """
        Visit *url* and build its Article. Raises ArticleExtractionError only
        when the page itself cannot be loaded; missing elements never raise.
        """
        try:
            self.driver.get(url)
        except WebDriverException as exc:
            raise ArticleExtractionError(url, exc.msg or type(exc).__name__) from exc
        self.waits.page_ready(self.context.timeout("page_ready"))

        article = Article(url)
        article.title_es = self._extract_title()
        logger.info("Title (ES): %s", article.title_es or "(not found)")

        first_para = self._extract_first_paragraph()
        logger.info("First paragraph (ES): %s", first_para or "(not found)")

        self._extract_image(article)
        return article

    def extract_all(self, urls: list[str]) -> list[Article]:
        """Extract every URL in order, skipping (and logging) the ones that fail."""
        articles: list[Article] = []
        for idx, url in enumerate(urls, start=1):
            logger.info("=== Article %d/%d ===", idx, len(urls))
            logger.info("URL: %s", url)
            try:
                article = self.extract_article(url)
            except Exception as exc:
                logger.error("Error processing article %s: %s", url, exc, exc_info=True)
                logger.info("(Skipping this article; continuing to next.)")
            else:
                articles.append(article)
                self.context.articles.append(article)
            if idx < len(urls):
                self._pause()
        return articles

    def _extract_title(self) -> str:
        el = self.waits.retrieve(self.context.locator("article_title"), self.context.timeout("title"))
        return el.text.strip() if el is not None and el.text else ""

    def _extract_first_paragraph(self) -> str:
        el = self.waits.retrieve(
            self.context.locator("first_paragraph"), self.context.timeout("paragraph")
        )
        return el.text.strip() if el is not None and el.text else ""

    def _extract_image(self, article: Article) -> None:
        try:
            img = self.waits.retrieve(
                self.context.locator("article_image"), self.context.timeout("image")
            )
            if img is None:
                logger.info("Image URL: (none)")
                return
            article.image_url = resolve_image_url(img)
            logger.info("Image URL: %s", article.image_url or "(none)")
        except WebDriverException as exc:
            logger.warning("Image: error while reading the image element: %s", exc.msg)
            return

        if article.image_url:
            try:
                article.image_path = self.saver(article.image_url, self.context.images_dir)
            except Exception as exc:
                logger.warning("Image: error while saving %s: %s", article.image_url, exc)
                return
            if article.image_path:
                logger.info("Saved image to: %s", article.image_path)
            else:
                logger.warning("Saved image to: (download failed)")

    def _pause(self) -> None:
        low, high = self.crawl_delay
        if high > 0:
            time.sleep(random.uniform(low, high))
