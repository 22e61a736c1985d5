"""Binary model format I/O

Layout (every field little-endian, fixed width):

    order:int32  smoothing:float64  total_words:int32
    word_count:uint64
      word_count x [byte_len:uint64, utf-8 bytes, count:int32]
    model_count:uint64
      model_count x [k:int32, context_count:uint64
        context_count x [ctx_len:uint64, ctx_len x [byte_len:uint64, utf-8 bytes],
                         word_map_size:uint64,
                         word_map_size x [byte_len:uint64, utf-8 bytes, count:int32]]]

The vocabulary is not written; it is rebuilt from the word-count keys.
"""

import math
import struct
import sys
from io import BytesIO
from typing import BinaryIO, Optional, TextIO

from nextword.store import FrequencyStore

INT32 = struct.Struct("<i")
UINT64 = struct.Struct("<Q")
HEADER = struct.Struct("<idi")


class ModelFormatError(ValueError):
    """Raised when model data is truncated or fails its sanity checks."""

    pass


# ========================
# Writing
# ========================


def _write_string(outfile: BinaryIO, text: str) -> None:
    data = text.encode("utf-8")
    outfile.write(UINT64.pack(len(data)))
    outfile.write(data)


def _write_word_counts(outfile: BinaryIO, word_counts) -> None:
    outfile.write(UINT64.pack(len(word_counts)))
    for word, count in word_counts.items():
        _write_string(outfile, word)
        outfile.write(INT32.pack(count))


def write_store(store: FrequencyStore, outfile: BinaryIO) -> None:
    """Serialize a frequency store to a binary file handle.

    Args:
        store: FrequencyStore to write
        outfile: Binary output file handle

    Raises:
        struct.error: If a count or the order does not fit its field
    """
    outfile.write(HEADER.pack(store.order, store.smoothing, store.total_words))

    _write_word_counts(outfile, store.unigram_counts)

    outfile.write(UINT64.pack(len(store.models)))
    for k, table in store.models.items():
        outfile.write(INT32.pack(k))
        outfile.write(UINT64.pack(len(table)))
        for context, word_counts in table.items():
            outfile.write(UINT64.pack(len(context)))
            for word in context:
                _write_string(outfile, word)
            _write_word_counts(outfile, word_counts)


def save_model(store: FrequencyStore, path: str, verbose: bool = False, logfile: Optional[TextIO] = None) -> bool:
    """Write a frequency store to a model file.

    An empty store (no trained words) is not worth persisting and is refused.

    Args:
        store: FrequencyStore to save
        path: Output file path
        verbose: Report progress on the log stream
        logfile: Log stream (default: stderr)

    Returns:
        True if successful, False otherwise
    """
    logfile = logfile or sys.stderr

    if store.total_words <= 0:
        print(f"Refusing to save empty model (total words: {store.total_words})", file=logfile)
        return False

    # Encode fully before touching the file so a bad value leaves it intact
    buffer = BytesIO()
    try:
        write_store(store, buffer)
    except struct.error as e:
        print(f"Model does not fit the file format: {e}", file=logfile)
        return False

    try:
        with open(path, "wb") as outfile:
            outfile.write(buffer.getvalue())
    except OSError as e:
        print(f"Failed to save model to {path}: {e}", file=logfile)
        return False

    if verbose:
        print(f"Saved model to {path} ({store.vocab_size} words, {store.total_words} tokens)", file=logfile)
    return True


# ========================
# Reading
# ========================


class _Reader:
    """Cursor over an in-memory model image with bounds checking."""

    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0

    def read(self, size: int) -> bytes:
        end = self.pos + size
        if end > len(self.data):
            raise ModelFormatError(f"Unexpected end of data at byte {self.pos} (wanted {size} bytes)")
        chunk = self.data[self.pos : end]
        self.pos = end
        return chunk

    def unpack(self, fmt: struct.Struct) -> tuple:
        return fmt.unpack(self.read(fmt.size))

    def int32(self) -> int:
        return self.unpack(INT32)[0]

    def uint64(self) -> int:
        return self.unpack(UINT64)[0]

    def string(self) -> str:
        raw = self.read(self.uint64())
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ModelFormatError(f"Invalid UTF-8 in word at byte {self.pos - len(raw)}") from e

    def count(self) -> int:
        value = self.int32()
        if value < 1:
            raise ModelFormatError(f"Invalid count {value} at byte {self.pos - INT32.size}")
        return value

    def at_end(self) -> bool:
        return self.pos == len(self.data)


def _decode(data: bytes) -> FrequencyStore:
    reader = _Reader(data)

    order, smoothing, total_words = reader.unpack(HEADER)
    if total_words <= 0:
        raise ModelFormatError(f"Invalid total word count: {total_words}")
    if order < 1:
        raise ModelFormatError(f"Invalid order: {order}")
    if not (math.isfinite(smoothing) and smoothing > 0.0):
        raise ModelFormatError(f"Invalid smoothing: {smoothing}")

    store = FrequencyStore(order, smoothing)
    store.total_words = total_words

    for _ in range(reader.uint64()):
        word = reader.string()
        store.unigram_counts[word] = reader.count()
    counted = sum(store.unigram_counts.values())
    if counted != total_words:
        raise ModelFormatError(f"Word counts sum to {counted}, header says {total_words}")
    store.vocabulary = set(store.unigram_counts)

    for _ in range(reader.uint64()):
        k = reader.int32()
        if not 2 <= k <= order:
            raise ModelFormatError(f"Model order {k} outside 2..{order}")
        table = store.context_table(k)

        for _ in range(reader.uint64()):
            ctx_len = reader.uint64()
            if ctx_len != k - 1:
                raise ModelFormatError(f"Context of length {ctx_len} in order {k} model")
            context = tuple(reader.string() for _ in range(ctx_len))

            word_counts = table[context]
            for _ in range(reader.uint64()):
                word = reader.string()
                word_counts[word] = reader.count()

    if not reader.at_end():
        raise ModelFormatError(f"{len(data) - reader.pos} unexpected trailing bytes")

    return store


def read_store(infile: BinaryIO) -> FrequencyStore:
    """Deserialize a frequency store from a binary file handle.

    Args:
        infile: Binary input file handle

    Returns:
        Newly built FrequencyStore

    Raises:
        ModelFormatError: If the data is truncated or corrupt
    """
    return _decode(infile.read())


def load_store(path: str) -> FrequencyStore:
    """Read a frequency store from a model file.

    Raises:
        OSError: If the file cannot be read
        ModelFormatError: If the file is truncated or corrupt
    """
    with open(path, "rb") as infile:
        return read_store(infile)


def load_model(store: FrequencyStore, path: str, verbose: bool = False, logfile: Optional[TextIO] = None) -> bool:
    """Replace the contents of a store with a model file.

    On failure the store is left empty (order and smoothing unchanged),
    never partially filled.

    Args:
        store: FrequencyStore to fill
        path: Model file path
        verbose: Report progress on the log stream
        logfile: Log stream (default: stderr)

    Returns:
        True if successful, False otherwise
    """
    logfile = logfile or sys.stderr

    store.clear()

    if verbose:
        print(f"Loading model from: {path}", file=logfile)

    try:
        loaded = load_store(path)
    except OSError as e:
        print(f"Failed to open model {path}: {e}", file=logfile)
        return False
    except ModelFormatError as e:
        print(f"Corrupt model {path}: {e}", file=logfile)
        return False

    store.replace_with(loaded)

    if verbose:
        print(f"Loaded model with order {store.order}", file=logfile)
        print(f"Vocabulary size: {store.vocab_size}", file=logfile)
        print(f"Total words: {store.total_words}", file=logfile)

    return True
