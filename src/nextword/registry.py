"""Handle-based access to predictor instances"""

from itertools import count
from typing import Optional

from nextword.lm import Prediction
from nextword.predictor import TextPredictor
from nextword.store import DEFAULT_ORDER


class PredictorRegistry:
    """
    Maps integer handles to live TextPredictor instances.

    This is the surface a host binding calls into: every operation takes the
    handle returned by create(). Handles start at 1 and are never reused by
    the same registry. An unknown or destroyed handle is not an error; the
    call does nothing and returns an empty result.

    Example:
        registry = PredictorRegistry()
        handle = registry.create("model.bin", order=3)
        registry.add_to_history(handle, "good morning")
        registry.predict(handle, "good", 3)
        registry.destroy(handle)
    """

    def __init__(self):
        self._predictors: dict[int, TextPredictor] = {}
        self._handles = count(1)

    def create(
        self, model_path: str, order: int = DEFAULT_ORDER, samples: Optional[list[str]] = None, **options
    ) -> int:
        """Create a predictor and return its handle.

        Args:
            model_path: Model file to load or create
            order: N-gram order for a new model
            samples: Sample texts to pre-train a new model on
            **options: Further TextPredictor keyword arguments

        Returns:
            Handle for the new predictor
        """
        predictor = TextPredictor(model_path, order=order, sample_texts=samples, **options)
        handle = next(self._handles)
        self._predictors[handle] = predictor
        return handle

    def get(self, handle: int) -> Optional[TextPredictor]:
        return self._predictors.get(handle)

    def add_to_history(self, handle: int, text: str) -> None:
        predictor = self._predictors.get(handle)
        if predictor is not None:
            predictor.add_to_history(text)

    def predict(self, handle: int, context: str, k: int = 3) -> list[Prediction]:
        predictor = self._predictors.get(handle)
        if predictor is None:
            return []
        return predictor.predict(context, k)

    def force_training(self, handle: int) -> bool:
        predictor = self._predictors.get(handle)
        if predictor is None:
            return False
        return predictor.force_training()

    def clear_history(self, handle: int) -> None:
        predictor = self._predictors.get(handle)
        if predictor is not None:
            predictor.clear_history()

    def get_model_info(self, handle: int) -> Optional[dict]:
        predictor = self._predictors.get(handle)
        if predictor is None:
            return None
        return predictor.get_model_info()

    def destroy(self, handle: int) -> None:
        """Drop a predictor. Buffered history that was not trained is lost."""
        self._predictors.pop(handle, None)

    def __contains__(self, handle: int) -> bool:
        return handle in self._predictors

    def __len__(self) -> int:
        return len(self._predictors)
