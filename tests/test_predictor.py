"""Tests for the history-driven TextPredictor"""

import pytest

from nextword import HISTORY_THRESHOLD, NGramModel, TextPredictor, format_model_info
from nextword.model_io import load_store

SAMPLES = [
    "good morning how are you",
    "see you tomorrow",
    "see you soon",
]


@pytest.fixture
def model_path(tmp_path):
    return str(tmp_path / "model.bin")


class TestConstruction:
    """Test the load-or-create paths"""

    def test_new_model_without_samples(self, model_path):
        predictor = TextPredictor(model_path, order=4)

        assert predictor.model.order == 4
        assert predictor.model.total_words == 0
        assert predictor.history_size == 0
        assert predictor.model_path == model_path

    def test_empty_new_model_is_not_saved(self, tmp_path):
        path = tmp_path / "model.bin"
        TextPredictor(str(path))
        assert not path.exists()

    def test_samples_are_trained_and_saved(self, model_path):
        predictor = TextPredictor(model_path, order=3, sample_texts=SAMPLES)

        assert predictor.model.total_words == 11
        saved = load_store(model_path)
        assert saved == predictor.model.store

    def test_samples_are_trained_separately(self, model_path):
        predictor = TextPredictor(model_path, order=2, sample_texts=["a b", "c d"])
        assert ("b",) not in predictor.model.store.models[2]

    def test_existing_file_is_loaded(self, model_path):
        TextPredictor(model_path, order=2, sample_texts=SAMPLES)

        predictor = TextPredictor(model_path, order=5, sample_texts=["ignored text"])

        assert predictor.model.order == 2
        assert "ignored" not in predictor.model.store.vocabulary
        assert predictor.predict_words("see", 1) == ["you"]

    def test_corrupt_file_falls_back_to_new_model(self, tmp_path):
        path = tmp_path / "model.bin"
        path.write_bytes(b"not a model")

        predictor = TextPredictor(str(path), order=4, sample_texts=SAMPLES)

        assert predictor.model.order == 4
        assert predictor.model.total_words == 0
        assert path.read_bytes() == b"not a model"

    def test_truncated_file_falls_back_to_new_model(self, model_path):
        TextPredictor(model_path, sample_texts=SAMPLES)
        with open(model_path, "rb") as f:
            data = f.read()
        with open(model_path, "wb") as f:
            f.write(data[:-3])

        predictor = TextPredictor(model_path, order=2)
        assert predictor.model.total_words == 0
        assert predictor.model.order == 2

    def test_model_path_is_read_only(self, model_path):
        predictor = TextPredictor(model_path)
        with pytest.raises(AttributeError):
            predictor.model_path = "elsewhere.bin"

    def test_invalid_threshold(self, model_path):
        with pytest.raises(ValueError, match="History threshold"):
            TextPredictor(model_path, history_threshold=0)


class TestHistory:
    """Test history buffering and retraining"""

    def test_default_threshold(self):
        assert HISTORY_THRESHOLD == 100

    def test_add_to_history_buffers(self, model_path):
        predictor = TextPredictor(model_path)
        predictor.add_to_history("hello there")

        assert predictor.history_size == 1
        assert predictor.model.total_words == 0

    def test_threshold_triggers_exactly_one_training(self, tmp_path, monkeypatch):
        path = tmp_path / "model.bin"
        predictor = TextPredictor(str(path))

        calls = []
        original = predictor.force_training

        def counting_force_training():
            calls.append(predictor.history_size)
            return original()

        monkeypatch.setattr(predictor, "force_training", counting_force_training)

        for i in range(99):
            predictor.add_to_history(f"entry number {i}")

        assert calls == []
        assert not path.exists()
        assert predictor.history_size == 99

        predictor.add_to_history("the last entry")

        assert calls == [100]
        assert path.exists()
        assert predictor.history_size == 0
        assert predictor.model.total_words == 99 * 3 + 3

    def test_custom_threshold(self, model_path):
        predictor = TextPredictor(model_path, history_threshold=2)
        predictor.add_to_history("one")
        assert predictor.model.total_words == 0

        predictor.add_to_history("two")
        assert predictor.model.total_words == 2
        assert predictor.history_size == 0

    def test_force_training_with_empty_history(self, model_path):
        predictor = TextPredictor(model_path)
        assert predictor.force_training() is False

    def test_force_training_trains_and_saves(self, model_path):
        predictor = TextPredictor(model_path)
        predictor.add_to_history("see you")
        predictor.add_to_history("tomorrow")

        assert predictor.force_training() is True
        assert predictor.history_size == 0

        # Entries are joined into one pass, so windows span them
        assert predictor.model.store.models[2][("you",)] == {"tomorrow": 1}
        assert load_store(model_path) == predictor.model.store

    def test_force_training_clears_even_without_words(self, model_path):
        predictor = TextPredictor(model_path)
        predictor.add_to_history("...")
        predictor.add_to_history("!!!")

        assert predictor.force_training() is False
        assert predictor.history_size == 0

    def test_force_training_clears_when_save_fails(self, tmp_path):
        predictor = TextPredictor(str(tmp_path / "no_such_dir" / "model.bin"))
        predictor.add_to_history("hello world")

        assert predictor.force_training() is False
        assert predictor.history_size == 0
        assert predictor.model.total_words == 2
        assert predictor.failed_saves == 1

    def test_automatic_save_failure_is_counted(self, tmp_path):
        predictor = TextPredictor(str(tmp_path / "no_such_dir" / "model.bin"), history_threshold=2)
        assert predictor.failed_saves == 0

        predictor.add_to_history("hello world")
        predictor.add_to_history("hello there")

        assert predictor.history_size == 0
        assert predictor.failed_saves == 1

    def test_successful_training_not_counted_as_failure(self, model_path):
        predictor = TextPredictor(model_path)
        predictor.add_to_history("hello world")

        assert predictor.force_training()
        assert predictor.failed_saves == 0

    def test_clear_history(self, model_path):
        predictor = TextPredictor(model_path)
        predictor.add_to_history("hello")
        predictor.add_to_history("world")
        predictor.clear_history()

        assert predictor.history_size == 0
        assert predictor.model.total_words == 0
        assert predictor.force_training() is False

    def test_history_survives_reload_only_after_training(self, model_path):
        predictor = TextPredictor(model_path, sample_texts=SAMPLES)
        predictor.add_to_history("brand new phrase")

        reopened = TextPredictor(model_path)
        assert "brand" not in reopened.model.store.vocabulary

        predictor.force_training()
        reopened = TextPredictor(model_path)
        assert "brand" in reopened.model.store.vocabulary


class TestPrediction:
    """Test prediction through the predictor"""

    def test_predict_delegates_to_model(self, model_path):
        predictor = TextPredictor(model_path, sample_texts=SAMPLES)

        model = NGramModel()
        model.train_many(SAMPLES)

        assert predictor.predict("see you", 3) == model.predict("see you", 3)

    def test_predict_on_empty_predictor(self, model_path):
        predictor = TextPredictor(model_path)
        assert predictor.predict("hello", 3) == []


class TestModelInfo:
    """Test get_model_info()"""

    def test_model_info(self, model_path):
        predictor = TextPredictor(model_path, order=3, sample_texts=SAMPLES, smoothing=0.2)
        predictor.add_to_history("pending text")

        info = predictor.get_model_info()
        assert info == {
            "order": 3,
            "vocab_size": predictor.model.vocab_size,
            "total_words": 11,
            "history_size": 1,
            "smoothing": 0.2,
        }

    def test_format_model_info(self, model_path):
        predictor = TextPredictor(model_path, sample_texts=SAMPLES)
        text = format_model_info(predictor.get_model_info())

        assert "Order: 3" in text
        assert "Total words: 11" in text
        assert "History entries: 0" in text

    def test_format_missing_info(self):
        assert format_model_info(None) == "No model available"


class TestVerbose:
    """Test verbose logging"""

    def test_threshold_logged(self, model_path, capsys):
        predictor = TextPredictor(model_path, history_threshold=1, verbose=True)
        predictor.add_to_history("hello world")

        err = capsys.readouterr().err
        assert "History threshold reached" in err
        assert "Saved model" in err

    def test_fallback_logged_without_verbose(self, tmp_path, capsys):
        path = tmp_path / "model.bin"
        path.write_bytes(b"bad")

        TextPredictor(str(path))
        assert "Failed to load model" in capsys.readouterr().err
