from __future__ import annotations

"""
Token Counting Engine.

Estimates how much of an LLM context window a piece of text consumes.
Routes to a tiktoken BPE encoding by name, or to a characters-per-token
heuristic when the 'heuristic' encoding is selected. Placeholder markers
count as zero and tokenizer failures degrade to zero with a warning, so
measurement never aborts the batch.
"""

import functools
import logging
import math
from abc import ABC, abstractmethod
from typing import Tuple

import tiktoken

from repopacker.domain.constants import DEFAULT_TOKENIZER_ENCODING, HEURISTIC_ENCODING

logger = logging.getLogger(__name__)

CHARS_PER_TOKEN_AVG = 4

PLACEHOLDER_PREFIXES: Tuple[str, ...] = ("[Binary", "[Skipped")

# -----------------------------------------------------------------------------
# STRATEGY INTERFACES
# -----------------------------------------------------------------------------

class TokenizerStrategy(ABC):
    """Abstract base for token counting algorithms."""

    @abstractmethod
    def count(self, text: str) -> int:
        """
        Calculate the token count for a text segment.

        Args:
            text: Input string.

        Returns:
            int: Token count.
        """


class HeuristicStrategy(TokenizerStrategy):
    """Character density estimate: ceil(len / 4)."""

    def count(self, text: str) -> int:
        if not text:
            return 0
        return math.ceil(len(text) / CHARS_PER_TOKEN_AVG)


class TiktokenStrategy(TokenizerStrategy):
    """Local BPE encoding through tiktoken."""

    def __init__(self, encoding_name: str = DEFAULT_TOKENIZER_ENCODING) -> None:
        self.encoding_name = encoding_name

    def count(self, text: str) -> int:
        encoding = _load_encoding(self.encoding_name)
        return len(encoding.encode(text, disallowed_special=()))


@functools.lru_cache(maxsize=8)
def _load_encoding(name: str) -> tiktoken.Encoding:
    """Load (and memoize) a tiktoken encoding; the first load may download BPE ranks."""
    logger.debug(f"Loading tiktoken encoding '{name}'")
    return tiktoken.get_encoding(name)

# -----------------------------------------------------------------------------
# SERVICE
# -----------------------------------------------------------------------------

class TokenizerService:
    """Selects a strategy per encoding name and shields callers from its failures."""

    def __init__(self) -> None:
        self.heuristic = HeuristicStrategy()
        self._tiktoken_strategies: dict = {}

    def strategy_for(self, encoding: str) -> TokenizerStrategy:
        name = (encoding or DEFAULT_TOKENIZER_ENCODING).strip()
        if name.lower() == HEURISTIC_ENCODING:
            return self.heuristic
        if name not in self._tiktoken_strategies:
            self._tiktoken_strategies[name] = TiktokenStrategy(name)
        return self._tiktoken_strategies[name]

    def count(self, text: str, encoding: str = DEFAULT_TOKENIZER_ENCODING) -> int:
        """
        Count tokens, returning 0 for empty text, placeholders and failures.

        Args:
            text: Content to measure.
            encoding: tiktoken encoding name or 'heuristic'.

        Returns:
            int: Token estimate.
        """
        if not text or is_placeholder_text(text):
            return 0

        strategy = self.strategy_for(encoding)
        try:
            return strategy.count(text)
        except Exception as e:
            logger.warning(f"Token counting with '{encoding}' failed: {e}")
            return 0

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

_SERVICE_INSTANCE = TokenizerService()


def is_placeholder_text(text: str) -> bool:
    """True for '[Binary...' and '[Skipped...' marker strings."""
    return text.startswith(PLACEHOLDER_PREFIXES)


def count_tokens(text: str, encoding: str = DEFAULT_TOKENIZER_ENCODING) -> int:
    """
    Estimate the number of tokens in `text`.

    Delegates to the module-level TokenizerService instance.

    Args:
        text: Input string content.
        encoding: tiktoken encoding name (e.g. 'cl100k_base') or 'heuristic'.

    Returns:
        int: Token count.
    """
    return _SERVICE_INSTANCE.count(text, encoding)


def count_chars(text: str) -> int:
    """Literal character length."""
    return len(text or "")
