"""
elpais_pipeline/navigation.py
-----------------------------
NavigationController — home page → consent banner → Opinion section.

Clicking the section link is preferred, but selectors drift: when the link
is missing or the click fails the section URL is loaded directly instead.
"""

import logging

from selenium.common.exceptions import WebDriverException

from elpais_pipeline.errors import NavigationError
from elpais_pipeline.models import RunContext
from elpais_pipeline.waits import WaitEngine

logger = logging.getLogger(__name__)


class NavigationController:
    """Drives page transitions on the context's driver."""

    def __init__(self, context: RunContext, waits: WaitEngine | None = None):
        self.context = context
        self.waits = waits or WaitEngine(context)

    # ── Page loads ───────────────────────────────────────────────────────────

    def open(self, base_url: str) -> None:
        logger.info("Navigating → %s", base_url)
        self.context.driver.get(base_url)
        self.waits.page_ready(self.context.timeout("page_ready"))

    def load(self, url: str) -> None:
        self.context.driver.get(url)
        self.waits.page_ready(self.context.timeout("page_ready"))

    # ── Consent banner ───────────────────────────────────────────────────────

    def dismiss_consent(self, locator: str) -> bool:
        """Click the cookie / GDPR accept button if it shows up. Best-effort."""
        btn = self.waits.clickable(locator, self.context.timeout("consent"))
        if btn is None:
            logger.debug("No consent banner found (or already dismissed).")
            return False
        try:
            btn.click()
        except WebDriverException as exc:
            logger.debug("Consent button could not be clicked: %s", exc)
            return False
        self.waits.until_gone(locator, self.context.timeout("consent"))
        logger.info("Consent banner dismissed.")
        return True

    def check_language(self, locator: str) -> bool:
        """Informational only: is the Spanish edition selected?"""
        found = self.waits.retrieve(locator, self.context.timeout("language")) is not None
        if found:
            logger.info("[Language] 'España' found — page likely Spanish.")
        else:
            logger.info("[Language] 'España' not found (page may already be Spanish).")
        return found

    # ── Section ──────────────────────────────────────────────────────────────

    def go_to_section(self, nav_locator: str, fallback_url: str) -> bool:
        """
        Click the section link, or load *fallback_url* when the link is absent
        or the click raises. Returns True if the click path was used.
        """
        link = self.waits.retrieve(nav_locator, self.context.timeout("nav"))
        if link is None:
            logger.info("Section link not found — navigating directly to %s", fallback_url)
            self.load(fallback_url)
            return False
        try:
            self._click(link)
        except NavigationError as exc:
            logger.warning("%s. Falling back to %s", exc, fallback_url)
            self.load(fallback_url)
            return False
        self.waits.page_ready(self.context.timeout("page_ready"))
        return True

    def confirm_section(self, header_locator: str, expected_url_prefix: str) -> bool:
        """Diagnostics only; never stops the run."""
        header = self.waits.retrieve(header_locator, self.context.timeout("section_header"))
        current = self.context.driver.current_url or ""
        on_section = header is not None or current.startswith(expected_url_prefix)
        logger.info("On section page? %s (URL: %s)", on_section, current)
        return on_section

    def _click(self, element) -> None:
        logger.info("Clicking section link...")
        try:
            element.click()
        except WebDriverException as exc:
            raise NavigationError(f"Failed to click section link: {exc.msg}") from exc
