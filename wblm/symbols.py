"""
Symbol Table

Maps vocabulary tokens to dense integer indices and back. Index 0 is
always the epsilon slot, which is never a real word.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .config import ConfigurationError


EPSILON_TOKEN = "<epsilon>"
EPSILON_INDEX = 0


class SymbolTable:
    """
    Token <-> index mapping.

    The vocabulary file holds one entry per line, either a bare token
    (numbered in file order starting at 1) or ``token index`` as in an
    OpenFst symbol table. Index 0 is epsilon; a file may name it (e.g.
    ``<eps> 0``) on its first entry, otherwise ``<epsilon>`` is used.
    """

    def __init__(self, path: Optional[str] = None):
        self.token_to_idx: Dict[str, int] = {EPSILON_TOKEN: EPSILON_INDEX}
        self.idx_to_token: Dict[int, str] = {EPSILON_INDEX: EPSILON_TOKEN}

        if path is not None:
            self._load(Path(path))

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> 'SymbolTable':
        """Build a table from an in-memory token list."""
        table = cls()
        for token in tokens:
            table._add(token, None)
        return table

    def _load(self, path: Path) -> None:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                for line_no, line in enumerate(f, start=1):
                    fields = line.split()
                    if not fields:
                        continue
                    if len(fields) == 1:
                        self._add(fields[0], None)
                    elif len(fields) == 2:
                        try:
                            index = int(fields[1])
                        except ValueError:
                            raise ConfigurationError(
                                f"{path}:{line_no}: invalid symbol index {fields[1]!r}")
                        self._add(fields[0], index)
                    else:
                        raise ConfigurationError(
                            f"{path}:{line_no}: expected 'token' or 'token index'")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Cannot read vocabulary {path}: {e}")

    def _add(self, token: str, index: Optional[int]) -> None:
        epsilon = self.idx_to_token[EPSILON_INDEX]
        if token == epsilon:
            if index not in (None, EPSILON_INDEX):
                raise ConfigurationError(f"{epsilon} must have index {EPSILON_INDEX}")
            return
        if index == EPSILON_INDEX and epsilon == EPSILON_TOKEN and len(self.idx_to_token) == 1:
            # The file names its own epsilon, e.g. "<eps> 0".
            del self.token_to_idx[epsilon]
            self.token_to_idx[token] = EPSILON_INDEX
            self.idx_to_token[EPSILON_INDEX] = token
            return
        if token in self.token_to_idx:
            raise ConfigurationError(f"Duplicate symbol: {token}")
        if index is None:
            index = max(self.idx_to_token) + 1
        if index < 0:
            raise ConfigurationError(f"Negative index for symbol {token}")
        if index in self.idx_to_token:
            raise ConfigurationError(
                f"Index {index} of {token} already used by {self.idx_to_token[index]}")
        self.token_to_idx[token] = index
        self.idx_to_token[index] = token

    def get_index(self, token: str) -> Optional[int]:
        """Return the index of ``token``, or None if it is not in the vocabulary."""
        return self.token_to_idx.get(token)

    def get_str(self, index: int) -> str:
        return self.idx_to_token[index]

    def indices(self) -> List[int]:
        """All word indices in ascending order, epsilon excluded."""
        return sorted(idx for idx in self.idx_to_token if idx != EPSILON_INDEX)

    def size(self) -> int:
        """Vocabulary size including the epsilon slot."""
        return len(self.idx_to_token)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, token: str) -> bool:
        return token in self.token_to_idx
