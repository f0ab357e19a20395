"""Retrieval-augmented answers over the nutrition knowledge base."""

import logging
from dataclasses import dataclass
from typing import Protocol

from calorie_tracker.domain.rag import VectorMatch, VectorRecord

PROMPT_TEMPLATE = (
    "Here is some relevant context:\n"
    "{context}\n"
    "\n"
    "Based on the above context, please answer the following question:\n"
    "{query}\n"
    "\n"
    "Provide a detailed and useful response."
)

_logger = logging.getLogger(__name__)


class EmbeddingClient(Protocol):
    """Interface for text embedding."""

    async def embed(self, text: str) -> list[float]:
        """Return the embedding vector for text."""


class VectorIndex(Protocol):
    """Interface for a namespaced vector index."""

    def ensure_collection(self, dimension: int) -> None:
        """Create the backing collection if it does not exist."""

    def upsert(self, vectors: list[VectorRecord], namespace: str) -> None:
        """Insert or overwrite vectors in a namespace."""

    def query(
        self,
        vector: list[float],
        namespace: str,
        top_k: int,
        include_metadata: bool = True,
    ) -> list[VectorMatch]:
        """Return the nearest matches within a namespace."""


class ChatClient(Protocol):
    """Interface for chat completions."""

    async def complete(self, prompt: str, temperature: float) -> str:
        """Return generated text for a prompt."""


@dataclass
class RagService:
    """Embeds questions, retrieves context and asks the language model."""

    embedding_client: EmbeddingClient
    vector_index: VectorIndex
    chat_client: ChatClient
    top_k: int = 5
    temperature: float = 0.7

    async def process_query(self, query: str, namespace: str) -> list[str]:
        """Return the stored texts that best match the query."""
        sanitized = query.strip()
        if not sanitized:
            _logger.warning("Query is empty; skipping retrieval")
            return []
        embedding = await self.embedding_client.embed(sanitized)
        return self._retrieve(embedding, namespace)

    async def generate_response(self, query: str, documents: list[str]) -> str:
        """Ask the chat model to answer the query using the documents."""
        prompt = build_prompt(query, documents)
        return await self.chat_client.complete(prompt, temperature=self.temperature)

    async def answer(self, query: str, namespace: str) -> str:
        """Run retrieval and generation for a single question."""
        documents = await self.process_query(query, namespace)
        if not documents:
            _logger.info("No context retrieved for namespace=%s", namespace)
        return await self.generate_response(query, documents)

    def _retrieve(self, embedding: list[float], namespace: str) -> list[str]:
        # Index outages degrade to an answer without context.
        try:
            matches = self.vector_index.query(
                embedding,
                namespace=namespace,
                top_k=self.top_k,
                include_metadata=True,
            )
        except Exception:
            _logger.exception(
                "Vector index query failed", extra={"namespace": namespace}
            )
            return []
        documents = []
        for match in matches:
            text = match.metadata.get("text")
            if isinstance(text, str) and text:
                documents.append(text)
        return documents


def build_prompt(query: str, documents: list[str]) -> str:
    """Combine retrieved documents and the question into one prompt."""
    context = "\n".join(documents)
    return PROMPT_TEMPLATE.format(context=context, query=query)
