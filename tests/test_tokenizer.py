"""
Unit tests for the word tokenizer.
"""

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from voltai.index.tokenizer import tokenize


class TestTokenize:
    """Tests for tokenize()."""

    def test_lowercases_and_splits_on_punctuation(self):
        """Punctuation and whitespace separate lowercase tokens."""
        assert tokenize("Hello, World! Machine-Learning.") == ["hello", "world", "machine", "learning"]

    def test_empty_text(self):
        """Empty input yields no tokens."""
        assert tokenize("") == []
        assert tokenize("  \n\t ") == []

    def test_digits_are_word_characters(self):
        """Digits stay inside tokens; dots split version numbers."""
        assert tokenize("K8s v1.2 2024") == ["k8s", "v1", "2", "2024"]

    def test_internal_apostrophe_is_kept(self):
        """Contractions stay a single token."""
        assert tokenize("Don't stop, it's fine") == ["don't", "stop", "it's", "fine"]

    def test_surrounding_quotes_are_dropped(self):
        """Apostrophes used as quotes are not part of the token."""
        assert tokenize("'quoted' words'") == ["quoted", "words"]

    def test_underscore_separates_tokens(self):
        """Underscores are not word characters."""
        assert tokenize("snake_case_name") == ["snake", "case", "name"]

    def test_unicode_letters(self):
        """Accented and non-Latin letters are word characters."""
        assert tokenize("Café naïve Über") == ["café", "naïve", "über"]
        assert tokenize("東京 tower") == ["東京", "tower"]

    def test_repeated_words_are_all_returned(self):
        """Tokenization keeps duplicates in order of appearance."""
        assert tokenize("data data DATA") == ["data", "data", "data"]
