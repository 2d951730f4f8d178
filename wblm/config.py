"""
Configuration and Errors

This module holds the configuration struct passed to the language model,
the helpers used to resolve it from a flat ``key -> value`` parameter
mapping, and the exceptions raised by the package.
"""

from dataclasses import dataclass, asdict
from typing import Dict, List, Mapping, Optional


DEFAULT_BOS = "<s>"
DEFAULT_EOS = "</s>"
DEFAULT_UNK = "<UNK>"
DEFAULT_ORDER = 3


class LMError(Exception):
    """Base class for language model errors."""


class ConfigurationError(LMError, ValueError):
    """Raised when the model cannot be constructed from its configuration."""


class InvalidNGramError(LMError, ValueError):
    """Raised when a query n-gram has an invalid length."""


def get_required_string_param(params: Mapping[str, str], name: str) -> str:
    """Return a parameter that must be present and non-empty."""
    value = params.get(name)
    if value is None or str(value) == "":
        raise ConfigurationError(f"Missing required parameter: {name}")
    return str(value)


def get_string_param(params: Mapping[str, str], name: str,
                     default: Optional[str] = None) -> Optional[str]:
    value = params.get(name)
    if value is None or str(value) == "":
        return default
    return str(value)


def get_int_param(params: Mapping[str, str], name: str, default: int) -> int:
    value = params.get(name)
    if value is None or str(value) == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Parameter '{name}' must be an integer, got {value!r}")


def parse_param_args(args: List[str]) -> Dict[str, str]:
    """
    Parse ``key=value`` strings into a parameter mapping.

    Args:
        args: Strings such as ``["n=2", "bos=<s>"]``

    Returns:
        Dictionary of parameters
    """
    params = {}
    for arg in args:
        key, sep, value = arg.partition("=")
        if not sep or not key:
            raise ConfigurationError(f"Expected key=value, got {arg!r}")
        params[key.strip()] = value.strip()
    return params


@dataclass
class LMConfig:
    """
    Language model configuration.

    Attributes:
        vocab: Path to the vocabulary (symbol table) file
        train: Path to the training corpus, one sentence per line
        bos: Beginning-of-sentence marker
        eos: End-of-sentence marker
        unk: Out-of-vocabulary marker
        n: Model order
        count_file: Optional path the count dump is written to
        test: Optional held-out corpus used for perplexity evaluation
    """
    vocab: str
    train: str
    bos: str = DEFAULT_BOS
    eos: str = DEFAULT_EOS
    unk: str = DEFAULT_UNK
    n: int = DEFAULT_ORDER
    count_file: Optional[str] = None
    test: Optional[str] = None

    def __post_init__(self):
        if not self.vocab:
            raise ConfigurationError("Missing required parameter: vocab")
        if not self.train:
            raise ConfigurationError("Missing required parameter: train")
        if self.n < 1:
            raise ConfigurationError("n must be at least 1")

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> 'LMConfig':
        """Build a configuration from a flat parameter mapping."""
        return cls(
            vocab=get_required_string_param(params, "vocab"),
            train=get_required_string_param(params, "train"),
            bos=get_string_param(params, "bos", DEFAULT_BOS),
            eos=get_string_param(params, "eos", DEFAULT_EOS),
            unk=get_string_param(params, "unk", DEFAULT_UNK),
            n=get_int_param(params, "n", DEFAULT_ORDER),
            count_file=get_string_param(params, "count_file"),
            test=get_string_param(params, "test"),
        )

    def to_dict(self) -> Dict:
        return asdict(self)
