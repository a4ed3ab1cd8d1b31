"""
Query Package for VoltAI - entry point for answering questions.

    from voltai.qa import QueryEngine, QueryAnswer, AnswerMode

Layers:
    QueryEngine -> Retriever (voltai.retrieval) -> AnswerGenerator (voltai.ai)
"""

from voltai.ai import AnswerGenerator, AnswerMode, QueryAnswer
from voltai.qa.query_engine import QueryEngine

__all__ = [
    "AnswerGenerator",
    "AnswerMode",
    "QueryAnswer",
    "QueryEngine",
]
