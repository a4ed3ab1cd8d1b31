"""
Word tokenizer shared by indexing and querying.

Tokens are runs of Unicode letters and digits, lowercased. An apostrophe is
kept only between two word characters, so contractions stay whole
("don't") while quotes around a word are dropped. No stemming and no
stop-word removal: every token is a vocabulary candidate.
"""

import re

# [^\W_] is \w without the underscore
WORD_PATTERN = re.compile(r"[^\W_]+(?:'[^\W_]+)*")


def tokenize(text: str) -> list[str]:
    """
    Split text into lowercase word tokens.

    Args:
        text: Raw text (may be empty)

    Returns:
        List of tokens in order of appearance

    Example:
        >>> tokenize("Don't panic: K8s, v1.2!")
        ["don't", 'panic', 'k8s', 'v1', '2']
    """
    if not text:
        return []
    return [match.group().lower() for match in WORD_PATTERN.finditer(text)]
