"""Shared fakes: an in-memory WebDriver good enough for WebDriverWait."""

from __future__ import annotations

import pytest
from selenium.common.exceptions import NoSuchElementException, WebDriverException

import config
from elpais_pipeline.models import Capability, DriverHandle, RunContext

L = config.LOCATORS

FAST_TIMEOUTS = {name: 0.05 for name in config.TIMEOUTS}


class FakeElement:
    def __init__(self, text="", attrs=None, displayed=True, enabled=True, on_click=None):
        self.text = text
        self.attrs = attrs or {}
        self.displayed = displayed
        self.enabled = enabled
        self.on_click = on_click
        self.clicks = 0

    def get_attribute(self, name):
        return self.attrs.get(name)

    def is_displayed(self):
        return self.displayed

    def is_enabled(self):
        return self.enabled

    def click(self):
        self.clicks += 1
        if self.on_click is not None:
            self.on_click()


class FakeDriver:
    """
    `pages` maps URL → {xpath: [FakeElement, ...]}. Lookups are made against
    the page of `current_url`.
    """

    def __init__(self, pages=None, ready_state="complete", failing_urls=()):
        self.pages = pages or {}
        self.ready_state = ready_state
        self.failing_urls = set(failing_urls)
        self.current_url = ""
        self.visited: list[str] = []
        self.scripts: list[str] = []
        self.quit_called = False

    def get(self, url):
        self.visited.append(url)
        if url in self.failing_urls:
            raise WebDriverException(f"net::ERR_CONNECTION_RESET at {url}")
        self.current_url = url

    def _page(self):
        return self.pages.get(self.current_url, {})

    def find_element(self, by, value):
        found = self._page().get(value, [])
        if not found:
            raise NoSuchElementException(f"no element for {value}")
        return found[0]

    def find_elements(self, by, value):
        return list(self._page().get(value, []))

    def remove(self, locator):
        self._page().pop(locator, None)

    def execute_script(self, script, *args):
        self.scripts.append(script)
        return self.ready_state

    def quit(self):
        self.quit_called = True


def make_context(driver, tmp_path=None, remote=False, capabilities=None, **kwargs) -> RunContext:
    caps = capabilities or frozenset({Capability.NAVIGABLE, Capability.SCRIPT_EXECUTABLE})
    kwargs.setdefault("timeouts", dict(FAST_TIMEOUTS))
    kwargs.setdefault("poll_frequency", 0.01)
    if tmp_path is not None:
        kwargs.setdefault("images_dir", tmp_path / "images")
    return RunContext(handle=DriverHandle(driver, caps, remote=remote), **kwargs)


@pytest.fixture
def driver():
    return FakeDriver()


@pytest.fixture
def context(driver, tmp_path):
    return make_context(driver, tmp_path)
