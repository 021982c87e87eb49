"""
Text analyzer turning raw field values into index terms.
"""

import re
from collections import Counter
from typing import FrozenSet, Iterable, List, Optional

from ..exceptions import ValidationError

_WORD_RE = re.compile(r"\w+", re.UNICODE)

ENGLISH_STOP_WORDS: FrozenSet[str] = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "but", "by", "for", "if",
        "in", "into", "is", "it", "no", "not", "of", "on", "or", "such",
        "that", "the", "their", "then", "there", "these", "they", "this",
        "to", "was", "will", "with",
    }
)


class Analyzer:
    """
    Regex word analyzer with lowercasing and optional stop word removal.

    The same analyzer must be used to index documents and to build
    similarity queries, otherwise query terms will not line up with the
    indexed postings.
    """

    def __init__(
        self,
        lowercase: bool = True,
        stop_words: Optional[Iterable[str]] = ENGLISH_STOP_WORDS,
        min_token_length: int = 1,
        max_token_length: int = 255,
    ) -> None:
        """
        Initialize analyzer.

        Args:
            lowercase: Whether to lowercase tokens
            stop_words: Tokens to drop (None keeps everything)
            min_token_length: Shortest token kept
            max_token_length: Longest token kept
        """
        if min_token_length < 1:
            raise ValidationError(
                f"min_token_length must be positive, got {min_token_length}",
                field="min_token_length",
                value=min_token_length,
            )

        if max_token_length < min_token_length:
            raise ValidationError(
                f"max_token_length ({max_token_length}) must not be less than "
                f"min_token_length ({min_token_length})",
                field="max_token_length",
                value=max_token_length,
            )

        self.lowercase = lowercase
        self.stop_words = frozenset(stop_words) if stop_words else frozenset()
        self.min_token_length = min_token_length
        self.max_token_length = max_token_length

    def tokenize(self, text: str) -> List[str]:
        """Split text into analyzed tokens, in order of appearance."""
        if not text:
            return []

        tokens = []
        for match in _WORD_RE.finditer(text):
            token = match.group()
            if self.lowercase:
                token = token.lower()
            if not self.min_token_length <= len(token) <= self.max_token_length:
                continue
            if token in self.stop_words:
                continue
            tokens.append(token)
        return tokens

    def term_frequencies(self, text: str) -> Counter:
        """Count analyzed tokens of a text."""
        return Counter(self.tokenize(text))

    def __repr__(self) -> str:
        return (
            f"<Analyzer(lowercase={self.lowercase}, stop_words={len(self.stop_words)}, "
            f"token_length={self.min_token_length}-{self.max_token_length})>"
        )
