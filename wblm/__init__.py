"""
Witten-Bell N-gram Language Model Package

Counts n-grams of a one-sentence-per-line corpus and answers smoothed
n-gram probability queries.
"""

from .config import LMConfig, LMError, ConfigurationError, InvalidNGramError
from .counts import NGramCounter
from .model import LangModel, ModelState
from .smoothing import WittenBellSmoother
from .symbols import SymbolTable

__version__ = "0.1.0"
__all__ = [
    "LangModel", "ModelState", "LMConfig", "SymbolTable", "NGramCounter",
    "WittenBellSmoother", "LMError", "ConfigurationError", "InvalidNGramError",
]
