"""
VoltAI AI Module
Prompt assembly and text generation via a local Ollama install.

Ollama is the only generation backend: it runs fully offline, and the
command-line backend needs nothing beyond the ollama binary on PATH. When
Ollama is unavailable, AnswerGenerator falls back to a keyword description
of the selected documents.
"""

from voltai.ai.answer_generator import AnswerGenerator, AnswerMode, QueryAnswer, describe_documents
from voltai.ai.ollama_generator import OllamaGenerator
from voltai.ai.prompt_builder import build_general_prompt, build_prompt, build_specific_prompt, top_keywords

__all__ = [
    'AnswerGenerator',
    'AnswerMode',
    'OllamaGenerator',
    'QueryAnswer',
    'build_general_prompt',
    'build_prompt',
    'build_specific_prompt',
    'describe_documents',
    'top_keywords',
]
