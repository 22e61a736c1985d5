#!/usr/bin/env python

import sys
from datetime import datetime
from typing import Iterable, Optional

from nextword.model_io import load_model, load_store, save_model
from nextword.store import DEFAULT_ORDER, DEFAULT_SMOOTHING, FrequencyStore
from nextword.tokenizer import tokenize

Prediction = tuple[str, float]


class NGramModel:
    """
    Predicts the next word from the words typed before it.

    The model counts every contiguous run of 2..order words it is trained on,
    keyed by the words preceding the last one. To predict, it looks up the
    longest context it can build from the end of the input and works down to
    shorter contexts, scoring each candidate with additive (Lidstone)
    smoothing:

        P(w | context) = (count + smoothing) / (context_total + smoothing * V)

    where V is the vocabulary size.

    Back-off here is cumulative: a word found after several context lengths
    gets the sum of its per-order probabilities rather than only the one from
    the longest context. This rewards words reinforced at several levels and
    is intentional, even though classic back-off models stop at the first hit.

    When the contexts yield fewer than k candidates, the most frequent
    remaining words fill the list with their smoothed unigram probability.

    Ties keep first-seen order (Python's sort is stable): unigram rankings
    follow the order words were first trained or loaded, back-off candidates
    the order they were first met, longest context first.

    Example:
        model = NGramModel(order=3)
        model.train("the cat sat on the mat")
        model.predict("the", 2)
        model.save("model.bin")
    """

    def __init__(self, order: int = DEFAULT_ORDER, smoothing: float = DEFAULT_SMOOTHING, verbose: bool = False):
        self.store = FrequencyStore(order, smoothing)
        self.verbose = verbose
        self.logfile = sys.stderr

    @property
    def order(self) -> int:
        return self.store.order

    @property
    def smoothing(self) -> float:
        return self.store.smoothing

    @property
    def vocab_size(self) -> int:
        return self.store.vocab_size

    @property
    def total_words(self) -> int:
        return self.store.total_words

    # ========================
    # Training
    # ========================

    def train(self, text: str) -> None:
        """
        Update the counts with a piece of text.

        Windows never span two calls: training on "a b" then "c d" never
        counts the bigram ("b", "c").

        Args:
            text: Raw text; empty or word-less text is ignored
        """
        start_time = datetime.now()

        words = tokenize(text)
        if not words:
            return

        store = self.store
        for word in words:
            store.add_word(word)

        for k in range(2, store.order + 1):
            for i in range(len(words) - k + 1):
                store.add_ngram(tuple(words[i : i + k - 1]), words[i + k - 1])

        if self.verbose:
            elapsed = datetime.now() - start_time
            print(
                f"Trained on {len(words)} words in {elapsed.total_seconds():.4f}s "
                f"(vocabulary: {store.vocab_size}, total: {store.total_words})",
                file=self.logfile,
            )

    def train_many(self, texts: Iterable[str]) -> None:
        """Train on each text separately, in order."""
        for text in texts:
            self.train(text)

    # ========================
    # Prediction
    # ========================

    def predict(self, context: str, k: int = 3) -> list[Prediction]:
        """
        Suggest the most probable next words after a piece of text.

        Args:
            context: Text typed so far (may be empty)
            k: Maximum number of suggestions

        Returns:
            Up to k (word, probability) pairs, highest probability first
        """
        if k <= 0:
            return []

        words = tokenize(context)
        if not words:
            return self._most_frequent(k)

        store = self.store
        vocab_size = store.vocab_size
        candidates: dict[str, float] = {}

        max_order = min(store.order, len(words) + 1)
        for n in range(max_order, 1, -1):
            table = store.models.get(n)
            if table is None:
                continue

            word_counts = table.get(tuple(words[-(n - 1) :]))
            if not word_counts:
                continue

            denominator = sum(word_counts.values()) + store.smoothing * vocab_size
            for word, count in word_counts.items():
                candidates[word] = candidates.get(word, 0.0) + (count + store.smoothing) / denominator

            if len(candidates) >= k:
                break

        if len(candidates) < k:
            self._fill_from_unigrams(candidates, k)

        ranked = sorted(candidates.items(), key=lambda item: item[1], reverse=True)
        return ranked[:k]

    def _ranked_unigrams(self, exclude: Optional[dict] = None) -> list[tuple[str, int]]:
        """Vocabulary words by descending count, optionally skipping some."""
        items = self.store.unigram_counts.items()
        if exclude:
            items = [(word, count) for word, count in items if word not in exclude]
        return sorted(items, key=lambda item: item[1], reverse=True)

    def _most_frequent(self, k: int) -> list[Prediction]:
        """Top k words by raw relative frequency, used when there is no context."""
        total = self.store.total_words if self.store.total_words > 0 else 1
        return [(word, count / total) for word, count in self._ranked_unigrams()[:k]]

    def _fill_from_unigrams(self, candidates: dict[str, float], k: int) -> None:
        """Top up candidates with smoothed unigram probabilities until there are k."""
        store = self.store
        total = store.total_words if store.total_words > 0 else 1
        vocab_size = store.vocab_size if store.vocab_size > 0 else 1
        denominator = total + store.smoothing * vocab_size

        remaining = k - len(candidates)
        for word, count in self._ranked_unigrams(exclude=candidates)[:remaining]:
            candidates[word] = (count + store.smoothing) / denominator

    def predict_words(self, context: str, k: int = 3) -> list[str]:
        """Like predict(), returning only the suggested words."""
        return [word for word, _ in self.predict(context, k)]

    # ========================
    # Statistics
    # ========================

    def get_statistics(self) -> dict:
        """
        Get model statistics.

        Returns:
            Dictionary with model statistics:
            {
                "order": int,
                "smoothing": float,
                "vocab_size": int,
                "total_words": int,
                "contexts": {order: count, ...},
                "ngram_counts": {order: count, ...}
            }
        """
        store = self.store
        return {
            "order": store.order,
            "smoothing": store.smoothing,
            "vocab_size": store.vocab_size,
            "total_words": store.total_words,
            "contexts": {k: len(store.models.get(k, {})) for k in range(2, store.order + 1)},
            "ngram_counts": store.ngram_counts(),
        }

    def print_statistics(self) -> None:
        """Print model statistics in formatted output."""
        stats = self.get_statistics()

        print("\nModel Statistics")
        print("=" * 50)
        print(f"Order:       {stats['order']}")
        print(f"Smoothing:   {stats['smoothing']}")
        print(f"Vocabulary:  {stats['vocab_size']:,} words")
        print(f"Total words: {stats['total_words']:,}")
        print()
        print("N-gram counts:")
        for order in sorted(stats["ngram_counts"].keys()):
            count = stats["ngram_counts"][order]
            contexts = stats["contexts"].get(order)
            suffix = f"  ({contexts:,} contexts)" if contexts is not None else ""
            print(f"  {order}-grams: {count:>12,}{suffix}")

    # ========================
    # Persistence
    # ========================

    def save(self, path: str) -> bool:
        """Write the model to a binary model file."""
        return save_model(self.store, path, verbose=self.verbose, logfile=self.logfile)

    def load(self, path: str) -> bool:
        """Replace the model with the contents of a model file.

        On failure the model is left empty and False is returned.
        """
        return load_model(self.store, path, verbose=self.verbose, logfile=self.logfile)

    @classmethod
    def from_file(cls, path: str, verbose: bool = False) -> "NGramModel":
        """Load a model file.

        Raises:
            OSError: If the file cannot be read
            ModelFormatError: If the file is truncated or corrupt
        """
        store = load_store(path)
        model = cls(order=store.order, smoothing=store.smoothing, verbose=verbose)
        model.store = store
        return model

    @classmethod
    def from_preset(cls, preset_name: str, **overrides) -> "NGramModel":
        """
        Create a model from a preset configuration.

        Args:
            preset_name: Name of preset ("compact", "balanced", "contextual")
            **overrides: Override any preset parameters (e.g., order=4, verbose=True)

        Raises:
            ValueError: If preset_name is unknown

        Example:
            model = NGramModel.from_preset("compact")
        """
        from nextword.presets import get_preset

        config = get_preset(preset_name)
        params = {"order": config["order"], "smoothing": config["smoothing"]}
        params.update(overrides)

        return cls(**params)
