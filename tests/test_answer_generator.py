"""
Tests for prompt assembly and answer generation.

The Ollama generator is replaced by a MagicMock so no model is needed.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from voltai.ai import (
    AnswerGenerator,
    AnswerMode,
    build_general_prompt,
    build_prompt,
    build_specific_prompt,
    describe_documents,
    top_keywords,
)
from voltai.ai.answer_generator import NO_DOCUMENTS_MESSAGE
from voltai.ai.ollama_generator import OllamaGenerator
from voltai.ai.prompt_builder import CONTEXT_HEADER
from voltai.config import Settings
from voltai.errors import GenerationError
from voltai.index import Index, IndexBuilder
from voltai.parallel import SequentialStrategy
from voltai.retrieval import QueryType, Retriever


@pytest.fixture
def index(tmp_path):
    (tmp_path / "a.txt").write_text("the cat is on the docker docker", encoding="utf-8")
    (tmp_path / "b.txt").write_text("kubernetes pods deployment", encoding="utf-8")
    return IndexBuilder(strategy=SequentialStrategy()).build(tmp_path)


@pytest.fixture
def mock_generator():
    generator = MagicMock()
    generator.select_model.return_value = "mistral"
    generator.generate.return_value = "Docker runs containers."
    return generator


class TestTopKeywords:
    """Tests for top_keywords()."""

    def test_heaviest_content_words_first(self, index):
        """Stop words and short words are skipped; repeated terms rank first."""
        assert top_keywords(index, 0) == ["docker", "cat"]

    def test_count_limit(self, index):
        """At most ``count`` terms are returned."""
        assert top_keywords(index, 1, count=2) == ["kubernetes", "pods"]

    def test_empty_index(self):
        """An empty index has no keywords."""
        assert top_keywords(Index.empty(), 0) == []


class TestPrompts:
    """Tests for prompt formats."""

    def test_specific_prompt_contains_document_text(self, index):
        """Specific prompts carry each document's path and text, then the question."""
        result = Retriever(index).retrieve("kubernetes pods deployment", k=1)
        prompt = build_specific_prompt(result.query, result.documents)

        doc = index.documents[1]
        assert prompt == (
            f"{CONTEXT_HEADER}Document: {doc.path}\n{doc.text}\n---\n"
            "\nQuestion: kubernetes pods deployment"
        )

    def test_prompt_without_documents_is_the_query(self):
        """With nothing selected the prompt is the bare query."""
        assert build_specific_prompt("what is docker", []) == "what is docker"
        assert build_general_prompt("summarize", [], Index.empty()) == "summarize"

    def test_general_prompt_lists_keywords_by_file(self, index):
        """General prompts describe each file by its terms instead of its text."""
        result = Retriever(index).retrieve("summarize all documents")
        prompt = build_prompt(result, index)

        assert "- a.txt: docker, cat\n" in prompt
        assert "- b.txt: kubernetes, pods, deployment\n" in prompt
        assert "Request: summarize all documents" in prompt
        assert "the cat is on the docker docker" not in prompt

    def test_build_prompt_dispatches_on_query_type(self, index):
        """build_prompt() uses the full-text form for specific queries."""
        result = Retriever(index).retrieve("kubernetes pods deployment", k=1)
        assert build_prompt(result, index).startswith(CONTEXT_HEADER)


class TestFallbackDescription:
    """Tests for the keyword description used without a model."""

    def test_describes_each_document(self, index):
        """Each line names the file, its key terms and its word count."""
        result = Retriever(index).retrieve("summarize all documents")
        assert describe_documents(result.documents, index) == (
            "a.txt: key terms: docker, cat (7 words)\n"
            "b.txt: key terms: kubernetes, pods, deployment (3 words)"
        )

    def test_no_documents(self, index):
        """No selection gives the fixed message."""
        assert describe_documents([], index) == NO_DOCUMENTS_MESSAGE


class TestAnswerGenerator:
    """Tests for AnswerGenerator.generate()."""

    def test_ollama_mode(self, index, mock_generator):
        """A successful model call gives an OLLAMA answer."""
        result = Retriever(index).retrieve("kubernetes pods deployment", k=1)

        answer = AnswerGenerator(mock_generator).generate(result, index)

        assert answer.answer_mode is AnswerMode.OLLAMA
        assert answer.answer == "Docker runs containers."
        assert answer.model == "mistral"
        assert answer.error is None
        assert answer.query_type is QueryType.SPECIFIC
        mock_generator.generate.assert_called_once_with(answer.prompt, "mistral")

    def test_model_override_is_passed_to_selection(self, index, mock_generator):
        """An explicit model goes through select_model()."""
        result = Retriever(index).retrieve("kubernetes pods deployment", k=1)
        AnswerGenerator(mock_generator).generate(result, index, model="gemma3:1b")
        mock_generator.select_model.assert_called_once_with("gemma3:1b")

    def test_fallback_mode_on_generation_error(self, index, mock_generator):
        """A failed model call falls back to the keyword description."""
        mock_generator.generate.side_effect = GenerationError("ollama failed: boom")
        result = Retriever(index).retrieve("kubernetes pods deployment", k=1)

        answer = AnswerGenerator(mock_generator).generate(result, index)

        assert answer.answer_mode is AnswerMode.FALLBACK
        assert answer.answer == "b.txt: key terms: kubernetes, pods, deployment (3 words)"
        assert answer.error == "ollama failed: boom"

    @patch("voltai.ai.ollama_generator.requests.post")
    def test_fallback_when_http_reply_is_not_json(self, mock_post, index, tmp_path):
        """A garbled reply from the Ollama server still ends in the keyword description."""
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
        mock_post.return_value = mock_response
        generator = OllamaGenerator(backend="http", settings=Settings(tmp_path / "missing.yaml"))
        result = Retriever(index).retrieve("kubernetes pods deployment", k=1)

        answer = AnswerGenerator(generator).generate(result, index, model="mistral")

        assert answer.answer_mode is AnswerMode.FALLBACK
        assert answer.answer == "b.txt: key terms: kubernetes, pods, deployment (3 words)"
        assert "unreadable response" in answer.error

    def test_no_generate_skips_the_model(self, index, mock_generator):
        """use_model=False never touches Ollama."""
        result = Retriever(index).retrieve("summarize all documents")

        answer = AnswerGenerator(mock_generator).generate(result, index, use_model=False)

        assert answer.answer_mode is AnswerMode.NONE
        assert answer.answer.startswith("a.txt: key terms:")
        assert answer.prompt
        mock_generator.select_model.assert_not_called()
        mock_generator.generate.assert_not_called()

    def test_empty_index_answer(self, mock_generator):
        """An empty index answers with the no-documents message."""
        result = Retriever(Index.empty()).retrieve("kubernetes pods deployment")

        answer = AnswerGenerator(mock_generator).generate(result, Index.empty(), use_model=False)

        assert answer.documents == []
        assert answer.prompt == "kubernetes pods deployment"
        assert answer.answer == NO_DOCUMENTS_MESSAGE
