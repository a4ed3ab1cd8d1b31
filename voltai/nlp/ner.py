"""
Pattern-based Named Entity Recognition.

Lightweight regex recognizer for emails, dates, money amounts, a fixed list
of well-known locations, organizations (capitalized name + corporate suffix)
and person names (runs of two or more capitalized words).

Each pattern carries a fixed confidence score. Patterns run in a fixed order
(most reliable first) and an entity's surface string is only reported once,
so "Acme Corp" found as an ORGANIZATION is not reported again as a PERSON.
"""

import re
from dataclasses import dataclass
from pathlib import Path

from voltai.extraction import ContentExtractor
from voltai.logging_config import debug_log


@dataclass(frozen=True)
class Entity:
    """
    A recognized entity.

    Attributes:
        word: Surface string as it appears in the text
        label: EMAIL, DATE, MONEY, LOCATION, ORGANIZATION or PERSON
        score: Pattern confidence (0.0-1.0)
        start: Start offset in the text
        end: End offset in the text
    """
    word: str
    label: str
    score: float
    start: int
    end: int


EMAIL_PATTERN = re.compile(r'\b([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})\b')

# 1/15/2024, 2024-01-15, "Jan 15, 2024", "January 15 2024"
DATE_PATTERN = re.compile(
    r'\b(\d{1,2}[/-]\d{1,2}[/-]\d{2,4}'
    r'|\d{4}[/-]\d{1,2}[/-]\d{1,2}'
    r'|(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\s+\d{1,2},?\s+\d{4})\b'
)

MONEY_PATTERN = re.compile(
    r'\$\s*\d+(?:,\d{3})*(?:\.\d{2})?'
    r'|\d+(?:,\d{3})*(?:\.\d{2})?\s*(?:USD|EUR|GBP|dollars?|euros?|pounds?)'
)

LOCATION_PATTERN = re.compile(
    r'\b((?:United States|USA|UK|United Kingdom|New York|California|Texas|London'
    r'|Paris|Tokyo|Beijing|Washington|Chicago|Los Angeles|San Francisco|Boston'
    r'|Seattle|Miami|Austin|Denver|Portland|Atlanta))\b'
)

ORGANIZATION_PATTERN = re.compile(
    r'\b([A-Z][a-z]+(?:\s+(?:Inc|LLC|Corp|Corporation|Ltd|Limited|Company|Co|Group'
    r'|Institute|University|College)\.?))\b'
)

PERSON_PATTERN = re.compile(r'\b([A-Z][a-z]+(?:\s+[A-Z][a-z]+)+)\b')

# Capitalized runs containing these are organizations, not people
ORGANIZATION_MARKERS = frozenset({'Inc', 'Corp', 'LLC', 'Ltd', 'University', 'College'})

# (label, pattern, capture group, score) in evaluation order
ENTITY_PATTERNS = (
    ("EMAIL", EMAIL_PATTERN, 1, 0.95),
    ("DATE", DATE_PATTERN, 0, 0.90),
    ("MONEY", MONEY_PATTERN, 0, 0.90),
    ("LOCATION", LOCATION_PATTERN, 1, 0.85),
    ("ORGANIZATION", ORGANIZATION_PATTERN, 1, 0.80),
    ("PERSON", PERSON_PATTERN, 1, 0.75),
)


def _looks_like_organization(word: str) -> bool:
    return any(marker in word for marker in ORGANIZATION_MARKERS)


def extract_entities_from_text(text: str) -> list[Entity]:
    """
    Find entities in ``text``.

    Returns:
        Entities sorted by start offset, one per distinct surface string
    """
    entities = []
    seen = set()

    for label, pattern, group, score in ENTITY_PATTERNS:
        for match in pattern.finditer(text):
            word = match.group(group)
            if word in seen:
                continue
            if label == "PERSON" and _looks_like_organization(word):
                continue
            seen.add(word)
            entities.append(Entity(
                word=word,
                label=label,
                score=score,
                start=match.start(group),
                end=match.end(group),
            ))

    entities.sort(key=lambda e: e.start)
    debug_log(f"[NER] Found {len(entities)} entities")
    return entities


def extract_entities(file_path: str | Path, extractor: ContentExtractor | None = None) -> list[Entity]:
    """
    Find entities in a file.

    Raises:
        ExtractionError: If the file type is unsupported or extraction fails
    """
    text = (extractor or ContentExtractor()).extract_or_raise(file_path)
    return extract_entities_from_text(text)
