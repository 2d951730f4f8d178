"""
Witten-Bell Smoothing

This module turns the three count tables collected during training into
smoothed conditional probabilities.
"""

from typing import Sequence

from .counts import NGramCounter


class WittenBellSmoother:
    """
    Witten-Bell Smoothing

    Interpolates the maximum likelihood estimate of each context with the
    estimate of its shortened context, down to a uniform distribution:

    P(w|h) = λ(h) * c(h, w) / c_hist(h) + (1 - λ(h)) * P(w|h')

    λ(h) = c_hist(h) / (c_hist(h) + N1+(h))

    Where h' is h without its oldest word, c_hist(h) is the number of times
    h was followed by a word and N1+(h) the number of distinct words that
    followed it. Contexts seen often with few distinct continuations get
    λ close to 1.

    For the empty context the counts are aggregated over the whole symbol
    inventory, and the lower-order estimate is the uniform 1 / V.
    """

    def __init__(self, vocab_size: int, pred_counts: NGramCounter,
                 hist_counts: NGramCounter, hist_one_plus_counts: NGramCounter,
                 inventory: Sequence[int]):
        if vocab_size < 1:
            raise ValueError("vocab_size must be at least 1")
        self.vocab_size = vocab_size
        self.pred_counts = pred_counts
        self.hist_counts = hist_counts
        self.hist_one_plus_counts = hist_one_plus_counts

        # Empty-context counts summed over the inventory: c_hist(()) is the
        # total of unigram counts and N1+(()) the number of distinct
        # symbols seen, both taken from the predictive counts.
        self.unigram_total = 0
        self.unigram_types = 0
        for idx in inventory:
            count = pred_counts.get_count((idx,))
            self.unigram_total += count
            if count > 0:
                self.unigram_types += 1

    @property
    def uniform_prob(self) -> float:
        return 1.0 / self.vocab_size

    def unigram_lambda(self) -> float:
        denom = self.unigram_total + self.unigram_types
        if denom == 0:
            return 0.0
        return self.unigram_total / denom

    def context_lambda(self, context: Sequence[int]) -> float:
        """Weight given to the maximum likelihood estimate of ``context``."""
        hist = self.hist_counts.get_count(context)
        if hist == 0:
            return 0.0
        return hist / (hist + self.hist_one_plus_counts.get_count(context))

    def unigram_prob(self, word: int) -> float:
        lam = self.unigram_lambda()
        prob = (1.0 - lam) * self.uniform_prob
        if lam > 0.0:
            prob += lam * self.pred_counts.get_count((word,)) / self.unigram_total
        return prob

    def prob(self, ngram: Sequence[int]) -> float:
        """
        Probability of the last index of ``ngram`` given the preceding ones.

        A context that never occurred as a history gets weight 0, so its
        lower-order estimate passes through unchanged.
        """
        ngram = tuple(ngram)
        if not ngram:
            raise ValueError("ngram must not be empty")
        word = ngram[-1]

        prob = self.unigram_prob(word)
        # Widen the context one word at a time, from h = (w_{L-1},) up to
        # the full history.
        for start in range(len(ngram) - 2, -1, -1):
            context = ngram[start:-1]
            lam = self.context_lambda(context)
            if lam == 0.0:
                continue
            p_ml = self.pred_counts.get_count(ngram[start:]) / self.hist_counts.get_count(context)
            prob = lam * p_ml + (1.0 - lam) * prob
        return prob
