"""
elpais_pipeline/waits.py
------------------------
WaitEngine — bounded, polling element lookups.

Every wait here has an explicit timeout and turns "the element never showed
up" into a None / False result instead of an exception, so callers can treat
UI presence as a plain maybe.
"""

import logging

from selenium.common.exceptions import WebDriverException
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from elpais_pipeline.models import Capability, RunContext

logger = logging.getLogger(__name__)


class WaitEngine:
    """Polls the context's driver for elements described by XPath locators."""

    def __init__(self, context: RunContext):
        self.context = context

    def _wait(self, timeout: float) -> WebDriverWait:
        return WebDriverWait(
            self.context.driver, timeout, poll_frequency=self.context.poll_frequency
        )

    def retrieve(self, locator: str, timeout: float):
        """Return the element once visible, or None when *timeout* elapses."""
        try:
            return self._wait(timeout).until(
                EC.visibility_of_element_located((By.XPATH, locator))
            )
        except WebDriverException:
            logger.debug("Not visible within %ss: %s", timeout, locator)
            return None

    def clickable(self, locator: str, timeout: float):
        """Return the element once it can be clicked, or None."""
        try:
            return self._wait(timeout).until(
                EC.element_to_be_clickable((By.XPATH, locator))
            )
        except WebDriverException:
            logger.debug("Not clickable within %ss: %s", timeout, locator)
            return None

    def until_gone(self, locator: str, timeout: float) -> bool:
        """Wait for the located element to disappear. False on timeout."""
        try:
            self._wait(timeout).until(
                EC.invisibility_of_element_located((By.XPATH, locator))
            )
            return True
        except WebDriverException:
            return False

    def page_ready(self, timeout: float) -> bool:
        """
        Wait for document.readyState == "complete".

        Needs a script-capable handle; without one there is no readiness
        signal to poll and the call returns False straight away.
        """
        handle = self.context.handle
        if not handle.supports(Capability.SCRIPT_EXECUTABLE):
            logger.debug("Handle cannot run scripts; skipping readiness wait.")
            return False
        try:
            self._wait(timeout).until(
                lambda _: handle.execute_script("return document.readyState") == "complete"
            )
            return True
        except WebDriverException:
            logger.debug("Page not complete after %ss; continuing anyway.", timeout)
            return False
