import pytest

from wblm.config import ConfigurationError
from wblm.symbols import SymbolTable, EPSILON_TOKEN, EPSILON_INDEX


def test_bare_tokens_are_numbered_after_epsilon(vocab_file):
    symbols = SymbolTable(vocab_file)
    assert symbols.get_index(EPSILON_TOKEN) == EPSILON_INDEX
    assert symbols.get_index("a") == 1
    assert symbols.get_index("<UNK>") == 5
    assert symbols.get_str(2) == "b"
    assert symbols.size() == 6
    assert symbols.indices() == [1, 2, 3, 4, 5]


def test_unknown_token_returns_none(vocab_file):
    symbols = SymbolTable(vocab_file)
    assert symbols.get_index("zebra") is None
    assert "zebra" not in symbols


def test_explicit_indices(tmp_path):
    path = tmp_path / "fst.syms"
    path.write_text("<epsilon> 0\n<s> 1\n</s> 2\nhello 7\n\n", encoding="utf-8")
    symbols = SymbolTable(str(path))
    assert symbols.get_index("hello") == 7
    assert symbols.get_str(7) == "hello"
    assert len(symbols) == 4


@pytest.mark.parametrize("content", [
    "a\na\n",
    "a 1\nb 1\n",
    "a\nb 0\n",
    "<eps> 0\nb 0\n",
    "a 1 2\n",
    "a x\n",
])
def test_malformed_vocabulary(tmp_path, content):
    path = tmp_path / "bad.syms"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigurationError):
        SymbolTable(str(path))


def test_missing_vocabulary_file(tmp_path):
    with pytest.raises(ConfigurationError):
        SymbolTable(str(tmp_path / "nope.syms"))


def test_named_epsilon(tmp_path):
    path = tmp_path / "eps.syms"
    path.write_text("<eps> 0\na 1\nb 2\n", encoding="utf-8")
    symbols = SymbolTable(str(path))
    assert symbols.get_index("<eps>") == EPSILON_INDEX
    assert symbols.get_index(EPSILON_TOKEN) is None
    assert symbols.get_str(EPSILON_INDEX) == "<eps>"
    assert symbols.indices() == [1, 2]
    assert symbols.size() == 3


def test_undecodable_vocabulary(tmp_path):
    path = tmp_path / "latin1.syms"
    path.write_bytes(b"a\n\xff\n")
    with pytest.raises(ConfigurationError):
        SymbolTable(str(path))
