"""
elpais_pipeline/analyzer.py
---------------------------
WordAnalyzer — counts word frequency across translated article headers
and reports words that appear more than the configured threshold.
"""

import config


def tokenize(text: str) -> list[str]:
    """Lower-case, turn non-letters into spaces, split on whitespace runs."""
    cleaned = "".join(ch if ch.isalpha() or ch.isspace() else " " for ch in text.lower())
    return cleaned.split()


def repeated_words(headers: list[str] | None, threshold: int = config.REPEAT_THRESHOLD) -> dict[str, int]:
    """
    Return {word: count} for words appearing STRICTLY MORE THAN *threshold*
    times across all headers combined. Keys keep the order in which each word
    was first seen.
    """
    if not headers:
        return {}
    counts: dict[str, int] = {}
    for header in headers:
        if header is None:
            continue
        for token in tokenize(header):
            counts[token] = counts.get(token, 0) + 1
    return {w: c for w, c in counts.items() if c > threshold}


class WordAnalyzer:
    """Analyses word frequency in a list of translated headers."""

    def __init__(self, threshold: int = config.REPEAT_THRESHOLD):
        """
        Args:
            threshold: Report words that appear STRICTLY MORE THAN this number.
        """
        self.threshold = threshold

    def analyze(self, headers: list[str] | None) -> dict[str, int]:
        return repeated_words(headers, self.threshold)

    def print_report(self, headers: list[str] | None) -> dict[str, int]:
        """Print a formatted frequency table to the console and return it."""
        repeated = self.analyze(headers)

        print("\n" + "=" * 55)
        print("  WORD FREQUENCY ANALYSIS (translated headers)")
        print("=" * 55)

        if not repeated:
            print(f"  No words appear more than {self.threshold} time(s).\n")
            return repeated

        print(f"  Words appearing more than {self.threshold} time(s):\n")
        print(f"  {'WORD':<25} {'COUNT':>5}")
        print(f"  {'-'*25} {'-'*5}")
        for word, count in repeated.items():
            print(f"  {word:<25} {count:>5}")
        print()
        return repeated
