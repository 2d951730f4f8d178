"""
N-gram Language Model Implementation

This module contains the LangModel class, which collects the counts
needed for Witten-Bell smoothing from a training corpus and answers
smoothed n-gram probability queries.
"""

import math
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, TextIO, Union

from .config import LMConfig, ConfigurationError, InvalidNGramError
from .corpus import split_line, convert_words_to_indices, read_lines
from .counts import NGramCounter
from .smoothing import WittenBellSmoother
from .symbols import SymbolTable


ProgressCallback = Callable[[int, Optional[int], str], None]


class ModelState(Enum):
    UNINITIALIZED = "uninitialized"
    TRAINING = "training"
    READY = "ready"


class LangModel:
    """
    N-gram Language Model with Witten-Bell smoothing

    The model is trained once, at construction, from the corpus named in
    its configuration and is read-only afterwards.

    Attributes:
        n: The order of the model (e.g., 2 for bigram, 3 for trigram)
        symbols: Symbol table mapping tokens to indices
        pred_counts: Occurrence counts of every n-gram of length 0..n
        hist_counts: Counts of each n-gram occurring as a history
        hist_one_plus_counts: Number of distinct words following each history
    """

    def __init__(self, config: LMConfig, symbols: Optional[SymbolTable] = None,
                 progress_callback: Optional[ProgressCallback] = None):
        """
        Build and train the model.

        Args:
            config: Model configuration
            symbols: Pre-loaded symbol table (default: load ``config.vocab``)
            progress_callback: Optional callback(current, total, stage)

        Raises:
            ConfigurationError: if the vocabulary or corpus cannot be read
                or the vocabulary lacks the BOS/EOS/UNK markers
        """
        self.state = ModelState.UNINITIALIZED
        self.config = config
        self.n = config.n

        self.symbols = symbols if symbols is not None else SymbolTable(config.vocab)
        self.bos_index = self.symbols.get_index(config.bos)
        self.eos_index = self.symbols.get_index(config.eos)
        self.unk_index = self.symbols.get_index(config.unk)
        if None in (self.bos_index, self.eos_index, self.unk_index):
            raise ConfigurationError("Vocabulary missing BOS/EOS/UNK token.")

        self.pred_counts = NGramCounter()
        self.hist_counts = NGramCounter()
        self.hist_one_plus_counts = NGramCounter()

        self.smoother: Optional[WittenBellSmoother] = None
        self.training_stats: Dict = {}

        self._train(config.train, progress_callback)

        if config.count_file:
            self.write_counts(config.count_file)

    @classmethod
    def from_params(cls, params: Mapping[str, str], **kwargs) -> 'LangModel':
        """Build a model from a flat ``key -> value`` parameter mapping."""
        return cls(LMConfig.from_params(params), **kwargs)

    @property
    def vocab_size(self) -> int:
        """Number of words the model predicts over (epsilon excluded)."""
        return self.symbols.size() - 1

    def _train(self, path: str, progress_callback: Optional[ProgressCallback]) -> None:
        self.state = ModelState.TRAINING
        num_sentences = 0
        num_tokens = 0

        for line in read_lines(path):
            words = split_line(line)
            indices = convert_words_to_indices(
                words, self.symbols, self.n,
                self.bos_index, self.eos_index, self.unk_index
            )
            self.count_sentence_ngrams(indices)

            num_sentences += 1
            num_tokens += len(words)
            if progress_callback and num_sentences % 100 == 0:
                progress_callback(num_sentences, None, "Counting n-grams")

        if progress_callback:
            progress_callback(num_sentences, num_sentences, "Counting n-grams")

        self.smoother = WittenBellSmoother(
            self.vocab_size,
            self.pred_counts,
            self.hist_counts,
            self.hist_one_plus_counts,
            self.symbols.indices(),
        )
        self.state = ModelState.READY

        self.training_stats = {
            'n': self.n,
            'vocab_size': self.vocab_size,
            'num_sentences': num_sentences,
            'total_tokens': num_tokens,
            'unique_ngrams': len(self.pred_counts),
            'total_ngrams': self.pred_counts.total(),
            'unique_histories': len(self.hist_counts),
        }

    def count_sentence_ngrams(self, sentence: Sequence[int]) -> None:
        """
        Collect the counts of one padded sentence.

        For each start position and each length 0..n, the window is counted
        as an n-gram; it is also counted as a history if a word follows it,
        and its first observation adds a continuation to its own history.
        Windows are clipped at the end of the sentence; a clipped window
        repeats one already counted for that start position, so counting
        stops there.
        """
        length = len(sentence)
        for it in range(length):
            for i in range(self.n + 1):
                end = min(it + i, length)
                if end - it < i:
                    break
                cut1 = tuple(sentence[it:end])

                pred_count = self.pred_counts.increment(cut1)
                if end < length:
                    self.hist_counts.increment(cut1)
                # First sighting of cut1 is a new continuation of its history,
                # whether or not cut1 is itself followed by a word.
                if i > 0 and pred_count < 2:
                    self.hist_one_plus_counts.increment(cut1[:-1])

    def get_prob(self, ngram: Sequence[int]) -> float:
        """
        Smoothed probability of the last index given the preceding ones.

        Args:
            ngram: Sequence of 1..n symbol indices

        Raises:
            InvalidNGramError: if the n-gram is empty or longer than n
        """
        if len(ngram) < 1 or len(ngram) > self.n:
            raise InvalidNGramError("Invalid n-gram size.")
        if self.state is not ModelState.READY:
            raise RuntimeError("Model must be trained before computing probabilities")
        return self.smoother.prob(ngram)

    def words_to_ngram(self, words: Iterable[str]) -> tuple:
        """Map tokens to indices, unknown tokens to the UNK index."""
        result = []
        for word in words:
            idx = self.symbols.get_index(word)
            result.append(self.unk_index if idx is None else idx)
        return tuple(result)

    def sentence_log_prob(self, words: Sequence[str]) -> float:
        """
        Natural log probability of a sentence, end marker included.

        The start markers are context only and are not predicted.
        """
        indices = convert_words_to_indices(
            words, self.symbols, self.n,
            self.bos_index, self.eos_index, self.unk_index
        )
        total = 0.0
        for i in range(self.n - 1, len(indices)):
            total += math.log(self.get_prob(indices[i - self.n + 1:i + 1]))
        return total

    def perplexity(self, lines: Iterable[str]) -> float:
        """
        Perplexity over raw text lines.

        Perplexity = exp(-1/N * sum(log P(w_i|context)))
        where N counts every predicted word including end markers.
        """
        total_log_prob = 0.0
        total_words = 0
        for line in lines:
            words = split_line(line)
            total_log_prob += self.sentence_log_prob(words)
            total_words += len(words) + 1
        if total_words == 0:
            raise ValueError("Cannot compute perplexity of an empty corpus")
        return math.exp(-total_log_prob / total_words)

    def write_counts(self, target: Union[str, Path, TextIO]) -> None:
        """Dump the three count tables to a file path or open stream."""
        if isinstance(target, (str, Path)):
            with open(target, 'w', encoding='utf-8') as f:
                self._write_counts(f)
        else:
            self._write_counts(target)

    def _write_counts(self, stream: TextIO) -> None:
        stream.write("# Pred counts.\n")
        self.pred_counts.write(stream, self.symbols)
        stream.write("# Hist counts.\n")
        self.hist_counts.write(stream, self.symbols)
        stream.write("# Hist 1+ counts.\n")
        self.hist_one_plus_counts.write(stream, self.symbols)

    def get_top_ngrams(self, order: int, top_k: int = 10) -> List:
        """Most frequent n-grams of the given length, as token tuples."""
        ngrams = [(ngram, count) for ngram, count in self.pred_counts.items()
                  if len(ngram) == order]
        ngrams.sort(key=lambda x: x[1], reverse=True)
        return [(tuple(self.symbols.get_str(i) for i in ngram), count)
                for ngram, count in ngrams[:top_k]]
