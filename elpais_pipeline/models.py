"""
elpais_pipeline/models.py
-------------------------
Plain data carried through a run: the scraped Article records, the
capability-typed driver handle and the per-run context every component
receives explicitly.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

import config
from elpais_pipeline.errors import CapabilityError


@dataclass
class Article:
    """
    One Opinion article. `url` is fixed at construction; the other fields
    are filled in as the pipeline progresses.

    title_es   : Spanish title, "" when the page has no title element
    title_en   : English title, set only once the whole batch is translated
    image_url  : cover image URL, None when no image was located
    image_path : where the image was saved locally, None if not saved
    content    : reserved, body text is not scraped
    """

    url: str
    title_es: str = ""
    title_en: str | None = None
    image_url: str | None = None
    image_path: str | None = None
    content: str | None = None

    def __post_init__(self):
        if not self.url:
            raise ValueError("Article requires a non-empty url")

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "url" and "url" in self.__dict__:
            raise AttributeError("Article.url cannot be changed once set")
        super().__setattr__(name, value)


class Capability(Enum):
    NAVIGABLE = "navigable"
    SCRIPT_EXECUTABLE = "script_executable"


@dataclass
class DriverHandle:
    """A WebDriver plus the capabilities its provider vouches for."""

    driver: Any
    capabilities: frozenset = frozenset({Capability.NAVIGABLE})
    remote: bool = False

    def supports(self, capability: Capability) -> bool:
        return capability in self.capabilities

    def execute_script(self, script: str, *args):
        if not self.supports(Capability.SCRIPT_EXECUTABLE):
            raise CapabilityError("driver handle cannot execute scripts")
        return self.driver.execute_script(script, *args)


def _run_images_dir() -> Path:
    return config.IMAGES_DIR / datetime.now().strftime("%Y%m%d_%H%M%S")


@dataclass
class RunContext:
    """
    Everything one pipeline run needs, passed by reference to each
    component. `articles` grows as pages are scraped, so whatever was
    extracted stays readable even if the run later fails.
    """

    handle: DriverHandle
    session_name: str = "local"
    locators: dict = field(default_factory=lambda: dict(config.LOCATORS))
    timeouts: dict = field(default_factory=lambda: dict(config.TIMEOUTS))
    poll_frequency: float = config.POLL_FREQUENCY
    images_dir: Path = field(default_factory=_run_images_dir)
    articles: list = field(default_factory=list)
    status: str | None = None   # set once the session status was reported

    @property
    def driver(self):
        return self.handle.driver

    def locator(self, name: str) -> str:
        return self.locators[name]

    def timeout(self, name: str) -> float:
        return self.timeouts[name]


@dataclass
class PipelineResult:
    articles: list[Article]
    repeated_words: dict[str, int]
