import pytest

from wblm.counts import NGramCounter
from wblm.smoothing import WittenBellSmoother


def make_counter(counts):
    counter = NGramCounter()
    for ngram, count in counts.items():
        for _ in range(count):
            counter.increment(ngram)
    return counter


@pytest.fixture
def smoother():
    # Two words; word 1 seen 3 times, word 2 once; context (1,) always
    # followed by 2.
    pred = make_counter({(1,): 3, (2,): 1, (1, 2): 2})
    hist = make_counter({(): 4, (1,): 2})
    one_plus = make_counter({(): 2, (1,): 1})
    return WittenBellSmoother(4, pred, hist, one_plus, inventory=[1, 2, 3, 4])


def test_unigram_weight(smoother):
    assert smoother.unigram_total == 4
    assert smoother.unigram_types == 2
    assert smoother.unigram_lambda() == pytest.approx(4 / 6)


def test_unigram_prob(smoother):
    assert smoother.unigram_prob(1) == pytest.approx(4 / 6 * 3 / 4 + 2 / 6 / 4)
    assert smoother.unigram_prob(3) == pytest.approx(2 / 6 / 4)


def test_interpolates_with_lower_order(smoother):
    lam = 2 / 3
    expected = lam * 1.0 + (1 - lam) * smoother.unigram_prob(2)
    assert smoother.context_lambda((1,)) == pytest.approx(lam)
    assert smoother.prob((1, 2)) == pytest.approx(expected)


def test_unseen_context_passes_through(smoother):
    assert smoother.context_lambda((4,)) == 0.0
    assert smoother.prob((4, 2)) == smoother.unigram_prob(2)
    assert smoother.prob((3, 4, 2)) == smoother.unigram_prob(2)


def test_no_counts_is_uniform():
    empty = NGramCounter()
    smoother = WittenBellSmoother(8, empty, empty, empty, inventory=range(1, 9))
    assert smoother.prob((5,)) == 1 / 8
    assert smoother.prob((1, 2, 5)) == 1 / 8


def test_rejects_empty_ngram(smoother):
    with pytest.raises(ValueError):
        smoother.prob(())
