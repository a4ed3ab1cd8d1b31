"""
End-to-end tests for QueryEngine: index on disk, retrieval, answer.
"""

import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from voltai.ai import AnswerGenerator, AnswerMode
from voltai.config import Settings
from voltai.errors import IndexFormatError
from voltai.index import index_directory
from voltai.parallel import SequentialStrategy
from voltai.qa import QueryEngine
from voltai.retrieval import QueryType


@pytest.fixture
def index_file(tmp_path):
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "docker.md").write_text(
        "Docker packages applications into containers. Containers share the host kernel.",
        encoding="utf-8",
    )
    (docs / "kubernetes.md").write_text(
        "Kubernetes schedules pods across nodes. A deployment manages pod replicas.",
        encoding="utf-8",
    )
    (docs / "pasta.txt").write_text("Boil the pasta in salted water.", encoding="utf-8")
    out = tmp_path / "voltai_index.json"
    index_directory(docs, out, strategy=SequentialStrategy())
    return out


@pytest.fixture
def settings(tmp_path):
    return Settings(tmp_path / "missing.yaml")


@pytest.fixture
def engine(index_file, settings):
    generator = MagicMock()
    generator.select_model.return_value = "mistral"
    generator.generate.return_value = "Containers share the host kernel."
    return QueryEngine(index_path=index_file, settings=settings, answer_generator=AnswerGenerator(generator))


class TestQueryEngine:
    """Tests for QueryEngine."""

    def test_requires_an_index_source(self):
        """Either an index or a path must be given."""
        with pytest.raises(ValueError):
            QueryEngine()

    def test_specific_query_retrieves_best_document(self, engine):
        """The most similar document comes first."""
        result = engine.retrieve("explain docker containers", k=1)
        assert result.query_type is QueryType.SPECIFIC
        assert [hit.document.filename for hit in result.documents] == ["docker.md"]

    def test_default_k_from_settings(self, engine):
        """Without k, the configured top_k is used."""
        result = engine.retrieve("explain docker containers")
        assert len(result.documents) == 3

    def test_answer_with_model(self, engine):
        """The mocked model's output is the answer."""
        answer = engine.answer("explain docker containers", k=1)
        assert answer.answer_mode is AnswerMode.OLLAMA
        assert answer.answer == "Containers share the host kernel."
        assert "docker.md" in answer.prompt

    def test_general_query_without_generation(self, engine):
        """A general request lists every document by keywords."""
        answer = engine.answer("summarize all documents", generate=False)

        assert answer.query_type is QueryType.GENERAL
        assert answer.answer_mode is AnswerMode.NONE
        lines = answer.answer.splitlines()
        assert [line.split(":")[0] for line in lines] == ["docker.md", "kubernetes.md", "pasta.txt"]

    def test_index_loaded_once(self, engine):
        """The index is cached after the first load."""
        assert engine.index is engine.index

    def test_missing_index_file(self, tmp_path, settings):
        """A missing index is an error for the caller."""
        engine = QueryEngine(index_path=tmp_path / "nope.json", settings=settings)
        with pytest.raises(FileNotFoundError):
            engine.answer("explain docker containers", generate=False)

    def test_malformed_index_file(self, tmp_path, settings):
        """A malformed index is an error for the caller."""
        path = tmp_path / "bad.json"
        path.write_text('{"docs": []}', encoding="utf-8")
        engine = QueryEngine(index_path=path, settings=settings)
        with pytest.raises(IndexFormatError):
            engine.answer("explain docker containers", generate=False)
