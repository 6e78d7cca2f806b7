"""
elpais_pipeline/errors.py
-------------------------
Exceptions raised by the pipeline.

Only TranslationError and ConfigurationError are meant to reach the caller;
the others are absorbed close to where they happen (URL fallback, per-article
isolation).
"""


class PipelineError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(PipelineError):
    """Missing credential or unusable setting, detected before the run starts."""


class NavigationError(PipelineError):
    """A navigational control could not be clicked."""


class ArticleExtractionError(PipelineError):
    """A single article page could not be processed."""

    def __init__(self, url: str, message: str):
        super().__init__(f"{url}: {message}")
        self.url = url


class TranslationError(PipelineError):
    """The batch translation request failed; fatal for the run."""

    def __init__(self, message: str, status: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status = status
        self.body = body


class CapabilityError(PipelineError):
    """The driver handle lacks a capability the caller asked for."""
