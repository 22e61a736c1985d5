"""Frequency tables backing the n-gram model"""

import math
from collections import defaultdict
from typing import Any

DEFAULT_ORDER = 3
DEFAULT_SMOOTHING = 0.1


class FrequencyStore:
    """
    Holds the vocabulary, unigram counts and per-order context tables.

    ``models`` maps an order k (2..order) to a table keyed by the context
    tuple of the k-1 preceding tokens; each context maps the following token
    to how often it was seen:

        models[3][("the", "cat")]["sat"] == 1

    Tuples compare by ordered element equality, so ("a", "b") and ("b", "a")
    are different contexts. Tables for an order are only created once a
    window of that length has been counted.
    """

    def __init__(self, order: int = DEFAULT_ORDER, smoothing: float = DEFAULT_SMOOTHING):
        if order < 1:
            raise ValueError(f"Order must be >= 1, got {order}")
        if not (math.isfinite(smoothing) and smoothing > 0.0):
            raise ValueError(f"Smoothing must be finite and > 0, got {smoothing}")

        self.order = order
        self.smoothing = smoothing
        self.total_words = 0
        self.vocabulary: set[str] = set()
        self.unigram_counts: dict[str, int] = defaultdict(int)
        self.models: dict[int, Any] = {}

    @staticmethod
    def _make_context_table() -> Any:
        """Create a context -> word -> count table."""
        return defaultdict(lambda: defaultdict(int))

    def context_table(self, k: int) -> Any:
        """Return the table for order k, creating it on first use."""
        if k not in self.models:
            self.models[k] = self._make_context_table()
        return self.models[k]

    def add_word(self, word: str, count: int = 1) -> None:
        self.vocabulary.add(word)
        self.unigram_counts[word] += count
        self.total_words += count

    def add_ngram(self, context: tuple[str, ...], word: str, count: int = 1) -> None:
        self.context_table(len(context) + 1)[context][word] += count

    @property
    def vocab_size(self) -> int:
        return len(self.vocabulary)

    def is_empty(self) -> bool:
        return self.total_words <= 0

    def clear(self) -> None:
        """Drop every count, keeping order and smoothing."""
        self.total_words = 0
        self.vocabulary = set()
        self.unigram_counts = defaultdict(int)
        self.models = {}

    def replace_with(self, other: "FrequencyStore") -> None:
        """Take over the configuration and counts of another store."""
        self.order = other.order
        self.smoothing = other.smoothing
        self.total_words = other.total_words
        self.vocabulary = other.vocabulary
        self.unigram_counts = other.unigram_counts
        self.models = other.models

    def ngram_counts(self) -> dict[int, int]:
        """Number of distinct n-grams stored for each order."""
        counts = {1: len(self.unigram_counts)}
        for k in range(2, self.order + 1):
            table = self.models.get(k, {})
            counts[k] = sum(len(word_counts) for word_counts in table.values())
        return counts

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FrequencyStore):
            return NotImplemented
        return (
            self.order == other.order
            and self.smoothing == other.smoothing
            and self.total_words == other.total_words
            and self.vocabulary == other.vocabulary
            and self.unigram_counts == other.unigram_counts
            and self.models == other.models
        )

    def __repr__(self) -> str:
        return (
            f"FrequencyStore(order={self.order}, smoothing={self.smoothing}, "
            f"vocab_size={self.vocab_size}, total_words={self.total_words})"
        )
