"""
Extraction Package

Turns source files (TXT, MD, CSV, JSON, PDF) into plain text for indexing.
"""

from voltai.extraction.content_extractor import ContentExtractor, ExtractionResult

__all__ = ['ContentExtractor', 'ExtractionResult']
