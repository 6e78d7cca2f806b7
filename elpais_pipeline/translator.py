"""
elpais_pipeline/translator.py
-----------------------------
ArticleTranslator — translates Spanish titles to English in ONE request.

Uses the Google Cloud Translation v2 REST API. All titles travel in a single
POST and come back as a list in the same order. Anything short of a
well-formed, same-length answer raises TranslationError: a misaligned batch
would silently attach the wrong English title to an article.
"""

import logging

import requests

import config
from elpais_pipeline.errors import ConfigurationError, TranslationError

logger = logging.getLogger(__name__)


class ArticleTranslator:
    """Batch translator for article titles via Google Translate v2."""

    def __init__(
        self,
        api_key: str = config.GOOGLE_API_KEY,
        source: str = config.TRANSLATION_SOURCE,
        target: str = config.TRANSLATION_TARGET,
        endpoint: str = config.TRANSLATE_URL,
        timeout=config.TRANSLATE_TIMEOUT,
    ):
        if not api_key:
            raise ConfigurationError(
                "GOOGLE_API_KEY is not set; export it or add it to .env"
            )
        self.api_key = api_key
        self.source = source
        self.target = target
        self.endpoint = endpoint
        self.timeout = timeout

    def build_payload(self, texts: list[str | None]) -> dict:
        return {
            "q": [t if t is not None else "" for t in texts],
            "source": self.source,
            "target": self.target,
            "format": "text",
        }

    def translate_batch(self, texts: list[str | None]) -> list[str]:
        """
        Translate *texts* and return the translations in input order.
        An empty list returns [] without touching the network.
        """
        if not texts:
            return []

        logger.info("Translating %d title(s) %s → %s in one request", len(texts), self.source, self.target)
        try:
            resp = requests.post(
                self.endpoint,
                params={"key": self.api_key},
                json=self.build_payload(texts),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TranslationError(f"Translation request failed: {exc}") from exc

        if not 200 <= resp.status_code < 300:
            raise TranslationError(
                f"Translate API v2 HTTP {resp.status_code} response: {resp.text}",
                status=resp.status_code,
                body=resp.text,
            )

        translated = self._parse(resp)
        if len(translated) != len(texts):
            raise TranslationError(
                f"Translate API returned {len(translated)} item(s) for {len(texts)} input(s). "
                f"Resp: {resp.text}",
                status=resp.status_code,
                body=resp.text,
            )
        return translated

    @staticmethod
    def _parse(resp: requests.Response) -> list[str]:
        try:
            items = resp.json()["data"]["translations"]
            out = []
            for item in items:
                text = item["translatedText"]
                if not isinstance(text, str):
                    raise TypeError(f"translatedText is {type(text).__name__}")
                out.append(text)
            return out
        except (ValueError, KeyError, TypeError) as exc:
            raise TranslationError(
                f"Malformed Translate API response ({exc!r}): {resp.text}",
                status=resp.status_code,
                body=resp.text,
            ) from exc
