"""
Answer Generator for VoltAI Queries.

Produces the answer for a retrieval result in one of three modes:
1. Ollama mode - the prompt is run through the local model
2. Fallback mode - Ollama failed; a keyword description of each selected
   document is returned instead, with the error kept on the answer
3. None mode - generation was switched off (--no-generate); same
   description, no model call

The fallback never quotes document text: it is built from each document's
highest-weighted index terms, so it is deterministic and works offline.
"""

from dataclasses import dataclass, field
from enum import Enum

from voltai.ai.ollama_generator import OllamaGenerator
from voltai.ai.prompt_builder import build_prompt, top_keywords
from voltai.config import DEBUG_MODE, FALLBACK_KEYWORDS_PER_DOC
from voltai.errors import GenerationError
from voltai.index.store import Index
from voltai.index.tokenizer import tokenize
from voltai.logging_config import debug_log, warning
from voltai.retrieval import QueryType, RetrievalResult, RetrievedDocument

NO_DOCUMENTS_MESSAGE = "No relevant information found in the documents."


class AnswerMode(Enum):
    """How the answer text was produced."""

    OLLAMA = "ollama"
    FALLBACK = "fallback"
    NONE = "none"


@dataclass
class QueryAnswer:
    """
    Everything produced for one query.

    Attributes:
        query: The query text
        query_type: GENERAL or SPECIFIC
        documents: Documents used as context
        prompt: Prompt sent (or that would have been sent) to the model
        answer: Answer text
        answer_mode: OLLAMA, FALLBACK or NONE
        model: Model name used, if generation ran
        error: Generation error message when answer_mode is FALLBACK
    """

    query: str
    query_type: QueryType
    documents: list[RetrievedDocument] = field(default_factory=list)
    prompt: str = ""
    answer: str = ""
    answer_mode: AnswerMode = AnswerMode.NONE
    model: str | None = None
    error: str | None = None


class AnswerGenerator:
    """
    Turns a RetrievalResult into a QueryAnswer.

    Args:
        generator: Ollama generator (created lazily on first use)

    Example:
        generator = AnswerGenerator()
        answer = generator.generate(result, index, model="mistral")
        print(answer.answer)
    """

    def __init__(self, generator: OllamaGenerator | None = None):
        self._generator = generator

    @property
    def generator(self) -> OllamaGenerator:
        """Lazy-load the Ollama generator so --no-generate never probes Ollama."""
        if self._generator is None:
            self._generator = OllamaGenerator()
        return self._generator

    def generate(
        self,
        result: RetrievalResult,
        index: Index,
        model: str | None = None,
        use_model: bool = True,
    ) -> QueryAnswer:
        """
        Answer a retrieval result.

        Args:
            result: Selected documents for the query
            index: Index the documents came from (for keyword lookup)
            model: Explicit model override
            use_model: False to skip Ollama and return the description

        Returns:
            QueryAnswer (never raises for generation failures)
        """
        prompt = build_prompt(result, index)
        answer = QueryAnswer(
            query=result.query,
            query_type=result.query_type,
            documents=list(result.documents),
            prompt=prompt,
        )

        if not use_model:
            answer.answer = describe_documents(result.documents, index)
            answer.answer_mode = AnswerMode.NONE
            return answer

        try:
            answer.model = self.generator.select_model(model)
            answer.answer = self.generator.generate(prompt, answer.model)
            answer.answer_mode = AnswerMode.OLLAMA
        except GenerationError as e:
            warning(f"[AnswerGenerator] Generation failed, using keyword fallback: {e}")
            answer.answer = describe_documents(result.documents, index)
            answer.answer_mode = AnswerMode.FALLBACK
            answer.error = str(e)

        if DEBUG_MODE:
            debug_log(f"[AnswerGenerator] Mode: {answer.answer_mode.value}, {len(answer.answer)} chars")

        return answer


def describe_document(hit: RetrievedDocument, index: Index, keywords_per_doc: int = FALLBACK_KEYWORDS_PER_DOC) -> str:
    """One-line keyword description of a document."""
    keywords = top_keywords(index, hit.position, keywords_per_doc)
    word_count = len(tokenize(hit.document.text))
    terms = ", ".join(keywords) if keywords else "(none)"
    return f"{hit.document.filename}: key terms: {terms} ({word_count} words)"


def describe_documents(documents: list[RetrievedDocument], index: Index) -> str:
    """Keyword descriptions for all selected documents, one per line."""
    if not documents:
        return NO_DOCUMENTS_MESSAGE
    return "\n".join(describe_document(hit, index) for hit in documents)
