"""nextword - Lightweight n-gram next-word prediction

This package learns word sequences from what a user types and suggests the
most probable next words, persisting its counts in a compact binary file.

Library Usage:
    from nextword import TextPredictor

    predictor = TextPredictor("model.bin", order=3, sample_texts=["see you soon"])
    predictor.add_to_history("see you tomorrow")
    predictor.force_training()
    predictor.predict("see you", 3)

Command Line Usage:
    nextword model.bin --demo -p "see you"
    nextword model.bin corpus.txt -m 4
    nextword model.bin -i
"""

from nextword.data import get_sample_corpus, list_sample_corpora, load_sample_texts
from nextword.lm import NGramModel
from nextword.model_io import ModelFormatError, load_model, load_store, read_store, save_model, write_store
from nextword.predictor import HISTORY_THRESHOLD, TextPredictor, format_model_info
from nextword.presets import get_preset, list_presets, print_presets
from nextword.registry import PredictorRegistry
from nextword.store import FrequencyStore
from nextword.tokenizer import clean_text, tokenize

__version__ = "0.1.0"
__all__ = [
    "FrequencyStore",
    "HISTORY_THRESHOLD",
    "ModelFormatError",
    "NGramModel",
    "PredictorRegistry",
    "TextPredictor",
    "clean_text",
    "format_model_info",
    "get_preset",
    "get_sample_corpus",
    "list_presets",
    "list_sample_corpora",
    "load_model",
    "load_sample_texts",
    "load_store",
    "print_presets",
    "read_store",
    "save_model",
    "tokenize",
    "write_store",
]
