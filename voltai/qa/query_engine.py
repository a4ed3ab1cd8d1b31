"""
Query Engine for VoltAI.

Coordinates one query end to end: load the index, classify the query,
select documents, assemble the prompt and generate the answer (falling back
to a keyword description when Ollama fails).

Architecture:
- Index is loaded once per engine from the index file (or passed in)
- Retriever classifies and selects documents
- AnswerGenerator builds the prompt and calls Ollama

A missing or malformed index file is an error for the caller; generation
failures are not.
"""

from pathlib import Path

from voltai.ai import AnswerGenerator, QueryAnswer
from voltai.config import DEBUG_MODE, Settings, get_settings
from voltai.index.store import Index, load_index
from voltai.logging_config import debug_log
from voltai.retrieval import QueryPolicy, RetrievalResult, Retriever


class QueryEngine:
    """
    Answers free-text queries against a persisted index.

    Example:
        engine = QueryEngine(index_path="voltai_index.json")
        answer = engine.answer("Explain docker containers", k=2)
        print(answer.answer)

    Args:
        index_path: Path to the JSON index (loaded on first use)
        index: An already-loaded Index (takes precedence over index_path)
        settings: Settings instance (defaults to the process-wide settings)
        answer_generator: AnswerGenerator (created on demand)
    """

    def __init__(
        self,
        index_path: str | Path | None = None,
        index: Index | None = None,
        settings: Settings | None = None,
        answer_generator: AnswerGenerator | None = None,
    ):
        if index is None and index_path is None:
            raise ValueError("QueryEngine needs an index or an index_path")

        self.index_path = Path(index_path) if index_path is not None else None
        self.settings = settings or get_settings()
        self.policy = QueryPolicy.from_settings(self.settings)
        self.answer_generator = answer_generator or AnswerGenerator()
        self._index = index
        self._retriever: Retriever | None = None

    @property
    def index(self) -> Index:
        """
        The loaded index.

        Raises:
            FileNotFoundError: If the index file does not exist
            IndexFormatError: If the index file is malformed
        """
        if self._index is None:
            self._index = load_index(self.index_path)
            if DEBUG_MODE:
                debug_log(
                    f"[QueryEngine] Loaded {self._index.document_count} documents, "
                    f"{len(self._index.vocabulary)} terms from {self.index_path}"
                )
        return self._index

    @property
    def retriever(self) -> Retriever:
        if self._retriever is None:
            self._retriever = Retriever(self.index, self.policy)
        return self._retriever

    def retrieve(self, query: str, k: int | None = None) -> RetrievalResult:
        """Classify the query and select documents without generating."""
        return self.retriever.retrieve(query, k if k is not None else self.settings.top_k)

    def answer(
        self,
        query: str,
        k: int | None = None,
        model: str | None = None,
        generate: bool = True,
    ) -> QueryAnswer:
        """
        Answer a query.

        Args:
            query: Free-text query
            k: Documents to use for a specific query (default from settings)
            model: Explicit Ollama model override
            generate: False to skip Ollama and return the keyword description

        Returns:
            QueryAnswer with the prompt, selected documents and answer text
        """
        result = self.retrieve(query, k)
        return self.answer_generator.generate(result, self.index, model=model, use_model=generate)
