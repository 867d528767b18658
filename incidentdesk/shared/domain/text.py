"""
Text Tokenisation
=================

Whitespace tokenisation shared by the scoring modules.

Tokens keep their punctuation: "email." and "email" are different words.
"""

from typing import List, Set

# Words of this length or shorter carry no signal
MIN_WORD_LENGTH = 2


def tokenize(text: str) -> List[str]:
    """Split text on whitespace into lowercase tokens."""
    return (text or "").lower().split()


def significant_words(text: str, min_length: int = MIN_WORD_LENGTH) -> List[str]:
    """Tokens longer than ``min_length``, in order, duplicates kept."""
    return [word for word in tokenize(text) if len(word) > min_length]


def word_set(text: str, min_length: int = MIN_WORD_LENGTH) -> Set[str]:
    """Distinct tokens longer than ``min_length``."""
    return set(significant_words(text, min_length))
