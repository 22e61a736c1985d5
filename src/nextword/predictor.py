"""History-driven predictor around a persisted n-gram model"""

import os
import sys
from typing import Optional

from nextword.lm import NGramModel, Prediction
from nextword.store import DEFAULT_ORDER, DEFAULT_SMOOTHING

HISTORY_THRESHOLD = 100  # Buffered entries that trigger retraining
HISTORY_SEPARATOR = " "


class TextPredictor:
    """
    Keeps one model file up to date with what the user types.

    Typed text is buffered in a history list. Once the buffer holds
    ``history_threshold`` entries, they are joined into a single training pass,
    the model is saved to ``model_path`` and the buffer is emptied.

    Construction either loads the model at ``model_path`` or, when there is
    no file yet, starts a fresh model (optionally pre-trained on sample texts
    and saved straight away). A file that fails to load is treated like a
    missing one, except that sample texts are not used.

    Example:
        predictor = TextPredictor("model.bin", order=3, sample_texts=["hello there"])
        predictor.add_to_history("see you tomorrow")
        predictor.predict("see you", 3)
    """

    def __init__(
        self,
        model_path: str,
        order: int = DEFAULT_ORDER,
        sample_texts: Optional[list[str]] = None,
        smoothing: float = DEFAULT_SMOOTHING,
        history_threshold: int = HISTORY_THRESHOLD,
        verbose: bool = False,
    ):
        if history_threshold < 1:
            raise ValueError(f"History threshold must be >= 1, got {history_threshold}")

        self._model_path = model_path
        self.history_threshold = history_threshold
        self.verbose = verbose
        self.logfile = sys.stderr
        self.history: list[str] = []
        self.failed_saves = 0

        if self.verbose:
            print(f"Initializing predictor with model path: {model_path}", file=self.logfile)

        if os.path.isfile(model_path) and os.access(model_path, os.R_OK):
            self.model = NGramModel(order, smoothing, verbose=verbose)
            if not self.model.load(model_path):
                print(f"Failed to load model, creating new one with order {order}", file=self.logfile)
                self.model = NGramModel(order, smoothing, verbose=verbose)
        else:
            if self.verbose:
                print(f"Creating new model with order {order}", file=self.logfile)
            self.model = NGramModel(order, smoothing, verbose=verbose)

            if sample_texts:
                if self.verbose:
                    print(f"Training with {len(sample_texts)} sample texts", file=self.logfile)
                self.model.train_many(sample_texts)
                self.save_model()

    @property
    def model_path(self) -> str:
        return self._model_path

    @property
    def history_size(self) -> int:
        return len(self.history)

    def add_to_history(self, text: str) -> None:
        """Buffer a piece of typed text, retraining once the threshold is reached."""
        self.history.append(text)

        if self.verbose:
            print(f"Added to history. Current size: {len(self.history)}/{self.history_threshold}", file=self.logfile)

        if len(self.history) >= self.history_threshold:
            if self.verbose:
                print("History threshold reached, training model...", file=self.logfile)
            self.force_training()

    def predict(self, context: str, k: int = 3) -> list[Prediction]:
        return self.model.predict(context, k)

    def predict_words(self, context: str, k: int = 3) -> list[str]:
        return self.model.predict_words(context, k)

    def save_model(self) -> bool:
        return self.model.save(self._model_path)

    def force_training(self) -> bool:
        """
        Train on the buffered history right away and save the model.

        The entries are joined into one text, so n-grams may span entries.
        The buffer is cleared once training has been attempted, whether or
        not saving works. Failed saves, including those triggered
        automatically by add_to_history(), are counted in ``failed_saves``.

        Returns:
            True if the model was saved, False if there was no history or
            the save failed
        """
        if not self.history:
            if self.verbose:
                print("No history to train on", file=self.logfile)
            return False

        if self.verbose:
            print(f"Training on {len(self.history)} history entries", file=self.logfile)

        self.model.train(HISTORY_SEPARATOR.join(self.history))
        saved = self.save_model()
        if not saved:
            self.failed_saves += 1
        self.history.clear()
        return saved

    def clear_history(self) -> None:
        count = len(self.history)
        self.history.clear()
        if self.verbose:
            print(f"Cleared {count} history entries", file=self.logfile)

    def get_model_info(self) -> dict:
        """
        Snapshot of the predictor state, for diagnostics.

        Returns:
            {
                "order": int,
                "vocab_size": int,
                "total_words": int,
                "history_size": int,
                "smoothing": float
            }
        """
        return {
            "order": self.model.order,
            "vocab_size": self.model.vocab_size,
            "total_words": self.model.total_words,
            "history_size": len(self.history),
            "smoothing": self.model.smoothing,
        }


def format_model_info(info: Optional[dict]) -> str:
    """Render get_model_info() output as lines of text."""
    if info is None:
        return "No model available"

    return "\n".join(
        [
            f"Order: {info['order']}",
            f"Vocabulary size: {info['vocab_size']}",
            f"Total words: {info['total_words']}",
            f"History entries: {info['history_size']}",
            f"Smoothing: {info['smoothing']}",
        ]
    )
