"""
Tests for building an index from a directory.

Builds run with SequentialStrategy so results are deterministic; one test
uses the real thread pool to check it produces the same index.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from voltai.extraction import ContentExtractor
from voltai.index import IndexBuilder, build_index, index_directory, index_to_dict, load_index, scan_directory
from voltai.parallel import SequentialStrategy, ThreadPoolStrategy


@pytest.fixture
def corpus(tmp_path):
    """Two-document corpus from the reference scenario."""
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "a.txt").write_text("machine learning artificial intelligence", encoding="utf-8")
    (docs / "b.txt").write_text("deep learning neural networks", encoding="utf-8")
    return docs


def build(directory, **kwargs):
    return IndexBuilder(strategy=SequentialStrategy(), **kwargs).build(directory)


class TestScanDirectory:
    """Tests for scan_directory()."""

    def test_recursive_sorted_and_filtered(self, tmp_path):
        """Allowed files are found recursively, sorted, others skipped."""
        (tmp_path / "sub").mkdir()
        (tmp_path / "b.md").write_text("b")
        (tmp_path / "a.txt").write_text("a")
        (tmp_path / "sub" / "c.csv").write_text("c")
        (tmp_path / "script.py").write_text("print()")
        (tmp_path / "image.png").write_bytes(b"\x89PNG")

        files = scan_directory(tmp_path, [".txt", ".md", ".csv"])

        assert files == sorted([tmp_path / "a.txt", tmp_path / "b.md", tmp_path / "sub" / "c.csv"])

    def test_extension_match_is_case_insensitive(self, tmp_path):
        """Upper-case extensions are included."""
        (tmp_path / "NOTES.TXT").write_text("x")
        assert scan_directory(tmp_path, [".txt"]) == [tmp_path / "NOTES.TXT"]

    def test_default_extensions_from_settings(self, tmp_path):
        """Without an explicit list the configured extensions apply."""
        (tmp_path / "data.json").write_text("{}")
        (tmp_path / "skip.xyz").write_text("x")
        assert scan_directory(tmp_path) == [tmp_path / "data.json"]

    def test_missing_directory(self, tmp_path):
        """A missing source directory is an error."""
        with pytest.raises(FileNotFoundError):
            scan_directory(tmp_path / "nope")

    def test_file_instead_of_directory(self, tmp_path):
        """A file path is not a directory."""
        target = tmp_path / "file.txt"
        target.write_text("x")
        with pytest.raises(NotADirectoryError):
            scan_directory(target)


class TestIndexBuilder:
    """Tests for IndexBuilder.build()."""

    def test_two_document_scenario(self, corpus):
        """Two documents sharing 'learning' give it document frequency 2."""
        index = build(corpus)

        assert index.document_count == 2
        assert [doc.id for doc in index.documents] == ["doc-a.txt", "doc-b.txt"]
        assert "learning" in index.vocabulary
        assert index.vocabulary.document_frequency["learning"] == 2
        assert index.vocabulary.terms[0] == "learning"
        assert index.vectors.shape == (2, len(index.vocabulary))

    def test_vectors_are_unit_length(self, corpus):
        """Every non-empty document vector has norm 1."""
        index = build(corpus)
        norms = np.linalg.norm(index.vectors, axis=1)
        assert norms.tolist() == pytest.approx([1.0, 1.0], abs=1e-6)

    def test_documents_keep_text_and_path(self, corpus):
        """Documents carry their path and extracted text."""
        index = build(corpus)
        assert index.documents[0].path == str(corpus / "a.txt")
        assert index.documents[1].text == "deep learning neural networks"

    def test_empty_directory(self, tmp_path):
        """An empty directory gives an empty index, not an error."""
        index = build(tmp_path)
        assert index.document_count == 0
        assert len(index.vocabulary) == 0
        assert index_to_dict(index)["vectors"] == []

    def test_build_is_idempotent(self, corpus):
        """Rebuilding the same directory gives an identical index."""
        assert index_to_dict(build(corpus)) == index_to_dict(build(corpus))

    def test_thread_pool_matches_sequential(self, corpus):
        """Parallel and sequential builds produce the same index."""
        for i in range(6):
            (corpus / f"extra{i}.md").write_text(f"extra document number {i} about learning", encoding="utf-8")

        with ThreadPoolStrategy(max_workers=3) as strategy:
            parallel = IndexBuilder(strategy=strategy).build(corpus)

        assert index_to_dict(parallel) == index_to_dict(build(corpus))

    def test_unreadable_file_becomes_empty_document(self, corpus):
        """An extraction failure is indexed as an empty body."""
        (corpus / "broken.pdf").write_bytes(b"this is not a pdf")

        index = build(corpus)

        broken = next(doc for doc in index.documents if doc.id == "doc-broken.pdf")
        assert broken.text == ""
        position = index.documents.index(broken)
        assert np.all(index.vectors[position] == 0.0)
        assert index.document_count == 3

    def test_extractor_exception_becomes_empty_document(self, corpus):
        """An exception raised while reading does not abort the build."""
        class FlakyExtractor(ContentExtractor):
            def extract(self, file_path):
                if Path(file_path).name == "a.txt":
                    raise OSError("disk error")
                return super().extract(file_path)

        index = build(corpus, extractor=FlakyExtractor())

        assert index.documents[0].text == ""
        assert index.documents[1].text == "deep learning neural networks"
        assert "machine" not in index.vocabulary

    def test_progress_callback(self, corpus):
        """Progress is reported once per file with the total."""
        calls = []
        build(corpus, progress=lambda done, total, path: calls.append((done, total)))
        assert calls == [(1, 2), (2, 2)]

    def test_missing_directory(self, tmp_path):
        """Building a missing directory raises."""
        with pytest.raises(FileNotFoundError):
            build(tmp_path / "missing")


class TestIndexDirectory:
    """Tests for the build-and-save entry points."""

    def test_index_directory_writes_loadable_file(self, corpus, tmp_path):
        """index_directory() saves an index that loads back identically."""
        out = tmp_path / "out" / "voltai_index.json"
        index = index_directory(corpus, out, strategy=SequentialStrategy())

        assert out.exists()
        assert index_to_dict(load_index(out)) == index_to_dict(index)

    def test_build_index_function(self, corpus):
        """build_index() is the one-call form of IndexBuilder."""
        index = build_index(corpus, strategy=SequentialStrategy())
        assert index.document_count == 2
