"""
N-gram Counter

A count table keyed by n-gram index tuples. Three instances back the
language model: predictive counts, history counts and history
one-plus counts.
"""

from collections import Counter
from typing import Iterator, Sequence, TextIO, Tuple

from .symbols import SymbolTable


NGram = Tuple[int, ...]


class NGramCounter:
    """
    Count table for n-grams of any length.

    Keys are exact index tuples, so ``(3,)`` and ``(3, 3)`` are distinct.
    Lookups of unseen n-grams return 0.
    """

    def __init__(self):
        self._counts: Counter = Counter()

    def increment(self, ngram: Sequence[int]) -> int:
        """Increment the count of ``ngram`` and return the new count."""
        key = tuple(ngram)
        self._counts[key] += 1
        return self._counts[key]

    def get_count(self, ngram: Sequence[int]) -> int:
        return self._counts.get(tuple(ngram), 0)

    def items(self) -> Iterator[Tuple[NGram, int]]:
        """Observed n-grams with their counts, in first-observation order."""
        return iter(self._counts.items())

    def total(self) -> int:
        return sum(self._counts.values())

    def write(self, stream: TextIO, symbols: SymbolTable) -> None:
        """Write one ``tokens... count`` line per observed n-gram."""
        for ngram, count in self._counts.items():
            fields = [symbols.get_str(idx) for idx in ngram] + [str(count)]
            stream.write(" ".join(fields) + "\n")

    def __len__(self) -> int:
        return len(self._counts)

    def __contains__(self, ngram) -> bool:
        return tuple(ngram) in self._counts

    def __eq__(self, other) -> bool:
        if not isinstance(other, NGramCounter):
            return NotImplemented
        return list(self._counts.items()) == list(other._counts.items())
