import pytest

from wblm import LangModel, LMConfig


VOCAB = ["a", "b", "<s>", "</s>", "<UNK>"]
CORPUS = ["a b a", "a a b"]


def write_lines(path, lines):
    path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
    return str(path)


@pytest.fixture
def vocab_file(tmp_path):
    return write_lines(tmp_path / "vocab.syms", VOCAB)


@pytest.fixture
def corpus_file(tmp_path):
    return write_lines(tmp_path / "train.txt", CORPUS)


@pytest.fixture
def make_model(tmp_path, vocab_file):
    """Factory training a model on the given sentences."""
    def _make(sentences=CORPUS, n=2, **kwargs):
        train = write_lines(tmp_path / f"train_{n}.txt", sentences)
        return LangModel(LMConfig(vocab=vocab_file, train=train, n=n, **kwargs))
    return _make


@pytest.fixture
def bigram_model(make_model):
    return make_model()
