"""Bundled sample corpora for cold-start training"""

import os
from typing import Optional

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")


def get_data_path(filename: str) -> str:
    """Get the absolute path to a data file.

    Raises:
        FileNotFoundError: If the data file doesn't exist
    """
    filepath = os.path.join(DATA_DIR, filename)

    if not os.path.exists(filepath):
        raise FileNotFoundError(f"Data file not found: {filename}")

    return filepath


def get_sample_corpus(name: Optional[str] = None) -> str:
    """Get path to a sample corpus file (default: 'samples.txt')."""
    if name is None:
        name = "samples.txt"
    return get_data_path(name)


def list_sample_corpora() -> list[str]:
    if not os.path.exists(DATA_DIR):
        return []

    return sorted(f for f in os.listdir(DATA_DIR) if f.endswith(".txt"))


def load_sample_texts(path: Optional[str] = None) -> list[str]:
    """Read sample texts, one per line, skipping blank lines.

    Args:
        path: Text file to read (default: the bundled sample corpus)

    Returns:
        List of stripped, non-empty lines
    """
    if path is None:
        path = get_sample_corpus()

    with open(path, encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip()]
