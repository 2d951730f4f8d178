"""
Corpus Reading and Preprocessing

This module reads a one-sentence-per-line corpus, splits lines into
tokens and converts them into padded index sequences for n-gram
counting.
"""

from pathlib import Path
from typing import Generator, List, Sequence

from .config import ConfigurationError
from .symbols import SymbolTable


def split_line(line: str) -> List[str]:
    """Split a raw line into whitespace-delimited tokens."""
    return line.split()


def add_sentence_markers(tokens: Sequence, n: int, bos, eos) -> List:
    """
    Add start and end markers to a sentence for n-gram counting.

    Args:
        tokens: Tokens (or indices) of the sentence
        n: The n in n-gram (determines number of start markers)
        bos: Start marker
        eos: End marker

    Returns:
        Tokens with (n-1) start markers and 1 end marker
    """
    return [bos] * (n - 1) + list(tokens) + [eos]


def convert_words_to_indices(words: Sequence[str], symbols: SymbolTable, n: int,
                             bos_index: int, eos_index: int,
                             unk_index: int) -> List[int]:
    """
    Map words to symbol indices and pad the result.

    Words missing from the vocabulary are mapped to ``unk_index``.
    """
    indices = []
    for word in words:
        idx = symbols.get_index(word)
        indices.append(unk_index if idx is None else idx)
    return add_sentence_markers(indices, n, bos_index, eos_index)


def read_lines(path: str) -> Generator[str, None, None]:
    """
    Yield the lines of a corpus file without their line terminator.

    Raises:
        ConfigurationError: if the file cannot be opened or read
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            for line in f:
                yield line.rstrip('\r\n')
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read corpus {path}: {e}")


def count_lines(path: str) -> int:
    """Count corpus lines, used to size progress displays."""
    return sum(1 for _ in read_lines(path))
