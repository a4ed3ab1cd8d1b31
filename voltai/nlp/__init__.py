"""
NLP helpers: pattern-based entities, lexicon sentiment, extractive summaries.

Independent of the index; each helper has a text variant and a file variant
that reads through ContentExtractor.
"""

from voltai.nlp.ner import Entity, extract_entities, extract_entities_from_text
from voltai.nlp.sentiment import Sentiment, analyze_sentiment, analyze_sentiment_text
from voltai.nlp.summarization import STOP_WORDS, summarize_text, summarize_text_content

__all__ = [
    "Entity",
    "STOP_WORDS",
    "Sentiment",
    "analyze_sentiment",
    "analyze_sentiment_text",
    "extract_entities",
    "extract_entities_from_text",
    "summarize_text",
    "summarize_text_content",
]
