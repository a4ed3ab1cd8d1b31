"""
Extractive Summarization

Scores sentences by the normalized frequency of their content words and keeps
the best ones in their original order.

Algorithm:
1. Split into sentences (runs of text ending in . ! or ?)
2. Count words (ASCII runs of letters, digits and apostrophes), skipping stop words and words of two characters or fewer
3. Normalize counts to 0-100 against the most frequent word
4. Sentence score = summed word scores // sentence word count;
   the first sentence is boosted by 1.5x
5. Keep the top 30% of sentences (at least 2, at most 5), in text order

Texts of three sentences or fewer are returned unchanged.
"""

import re
from collections import Counter
from pathlib import Path

from voltai.extraction import ContentExtractor

NO_CONTENT_MESSAGE = "(No content to summarize)"

SENTENCE_PATTERN = re.compile(r'[^.!?]+[.!?]+')
# ASCII letters, digits and apostrophes; coarser than the index tokenizer
WORD_PATTERN = re.compile(r"[a-zA-Z0-9']+")

STOP_WORDS = frozenset({
    "a", "an", "and", "are", "as", "at", "be", "by", "for", "from",
    "has", "he", "in", "is", "it", "its", "of", "on", "that", "the",
    "to", "was", "will", "with", "this", "but", "they", "have",
    "had", "what", "when", "where", "who", "which", "why", "how",
})

MIN_WORD_LENGTH = 3
SHORT_TEXT_SENTENCES = 3
FIRST_SENTENCE_BOOST = 1.5
SUMMARY_RATIO_PERCENT = 30
MIN_SUMMARY_SENTENCES = 2
MAX_SUMMARY_SENTENCES = 5


def split_sentences(text: str) -> list[str]:
    """Sentences of ``text``, stripped; trailing text without punctuation is dropped."""
    sentences = (m.group(0).strip() for m in SENTENCE_PATTERN.finditer(text))
    return [s for s in sentences if s]


def summary_words(sentence: str) -> list[str]:
    return [m.group(0).lower() for m in WORD_PATTERN.finditer(sentence)]


def is_content_word(word: str) -> bool:
    return len(word) >= MIN_WORD_LENGTH and word not in STOP_WORDS


def summarize_text_content(text: str) -> str:
    """Extractive summary of ``text``."""
    sentences = split_sentences(text)
    if not sentences:
        return NO_CONTENT_MESSAGE
    if len(sentences) <= SHORT_TEXT_SENTENCES:
        return text

    sentence_words = [summary_words(s) for s in sentences]

    frequencies = Counter(
        word for words in sentence_words for word in words if is_content_word(word)
    )
    max_freq = max(frequencies.values(), default=1)
    normalized = {word: count * 100 // max_freq for word, count in frequencies.items()}

    scores = []
    for position, words in enumerate(sentence_words):
        score = sum(normalized.get(word, 0) for word in words)
        if words:
            score //= len(words)
        if position == 0:
            score = int(score * FIRST_SENTENCE_BOOST)
        scores.append((position, score))

    keep = max(MIN_SUMMARY_SENTENCES, min(MAX_SUMMARY_SENTENCES, len(sentences) * SUMMARY_RATIO_PERCENT // 100))
    # sorted() is stable: equal scores keep text order
    ranked = sorted(scores, key=lambda item: item[1], reverse=True)
    selected = sorted(position for position, _ in ranked[:keep])

    return " ".join(sentences[i] for i in selected)


def summarize_text(file_path: str | Path, extractor: ContentExtractor | None = None) -> str:
    """
    Summarize a file.

    Raises:
        ExtractionError: If the file type is unsupported or extraction fails
    """
    text = (extractor or ContentExtractor()).extract_or_raise(file_path)
    return summarize_text_content(text)
