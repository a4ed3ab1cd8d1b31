"""
Lexicon-based sentiment analysis.

Counts positive and negative lexicon hits. An intensifier directly before a
sentiment word multiplies its weight by 1.5; a negation in either of the two
preceding words flips its polarity. The winning side must lead by more than
0.1 of the total, otherwise the text is Neutral (0.5).
"""

import re
from dataclasses import dataclass
from pathlib import Path

from voltai.extraction import ContentExtractor

POSITIVE_WORDS = frozenset({
    "good", "great", "excellent", "wonderful", "fantastic", "amazing", "awesome",
    "love", "happy", "joy", "pleased", "delighted", "satisfied", "perfect",
    "beautiful", "brilliant", "outstanding", "superb", "magnificent", "marvelous",
    "terrific", "fabulous", "exceptional", "impressive", "remarkable", "best",
    "better", "positive", "advantage", "benefit", "success", "successful",
    "win", "winner", "winning", "accomplished", "achievement", "triumph",
    "enjoy", "pleasant", "comfortable", "excited", "exciting", "thrilled",
    "approve", "approved", "approval", "like", "liked", "favorite", "prefer",
})

NEGATIVE_WORDS = frozenset({
    "bad", "terrible", "awful", "horrible", "poor", "worst", "worse",
    "hate", "angry", "sad", "upset", "disappointed", "dissatisfied", "unhappy",
    "fail", "failure", "failed", "problem", "issue", "wrong", "error",
    "difficult", "hard", "tough", "struggle", "struggling", "broken",
    "pain", "painful", "hurt", "hurting", "damage", "damaged", "disaster",
    "negative", "loss", "lose", "losing", "lost", "defeat", "defeated",
    "reject", "rejected", "rejection", "dislike", "disliked", "unpleasant",
    "uncomfortable", "disappointing", "frustrate", "frustrated", "frustrating",
})

INTENSIFIERS = frozenset({"very", "extremely", "absolutely", "really", "incredibly", "highly", "totally"})

NEGATIONS = frozenset({"not", "no", "never", "nothing", "nobody", "nowhere", "neither", "nor", "none"})

INTENSIFIER_MULTIPLIER = 1.5
NEGATION_WINDOW = 2
DECISION_MARGIN = 0.1
NEUTRAL_SCORE = 0.5

# Letters, digits and apostrophes; everything else separates words
_WORD_SPLIT = re.compile(r"(?:[^\W_]|')+")


@dataclass(frozen=True)
class Sentiment:
    """Overall sentiment label (Positive, Negative or Neutral) and its score."""
    label: str
    score: float


def analyze_sentiment_text(text: str) -> Sentiment:
    """Score ``text`` against the sentiment lexicons."""
    words = _WORD_SPLIT.findall(text.lower())

    positive = 0.0
    negative = 0.0
    for i, word in enumerate(words):
        if word in POSITIVE_WORDS:
            polarity = 1
        elif word in NEGATIVE_WORDS:
            polarity = -1
        else:
            continue

        weight = INTENSIFIER_MULTIPLIER if i > 0 and words[i - 1] in INTENSIFIERS else 1.0
        window = words[max(0, i - NEGATION_WINDOW):i]
        if any(w in NEGATIONS for w in window):
            polarity = -polarity

        if polarity > 0:
            positive += weight
        else:
            negative += weight

    total = positive + negative
    if total == 0:
        return Sentiment(label="Neutral", score=NEUTRAL_SCORE)

    pos_ratio = positive / total
    neg_ratio = negative / total
    if pos_ratio > neg_ratio + DECISION_MARGIN:
        return Sentiment(label="Positive", score=pos_ratio)
    if neg_ratio > pos_ratio + DECISION_MARGIN:
        return Sentiment(label="Negative", score=neg_ratio)
    return Sentiment(label="Neutral", score=NEUTRAL_SCORE)


def analyze_sentiment(file_path: str | Path, extractor: ContentExtractor | None = None) -> Sentiment:
    """
    Analyze the sentiment of a file.

    Raises:
        ExtractionError: If the file type is unsupported or extraction fails
    """
    text = (extractor or ContentExtractor()).extract_or_raise(file_path)
    return analyze_sentiment_text(text)
