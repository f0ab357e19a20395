"""OpenAI embeddings client."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from calorie_tracker.services.rag import EmbeddingClient


@dataclass
class OpenAIEmbeddingClient(EmbeddingClient):
    """Embedding client backed by the OpenAI embeddings API."""

    client: AsyncOpenAI
    model: str

    @classmethod
    def create(cls, api_key: str, model: str) -> "OpenAIEmbeddingClient":
        """Create an embedding client with its own OpenAI session."""
        return cls(client=AsyncOpenAI(api_key=api_key), model=model)

    async def embed(self, text: str) -> list[float]:
        """Return the embedding vector for text."""
        response = await self.client.embeddings.create(model=self.model, input=text)
        if not response.data:
            raise RuntimeError("OpenAI returned no embedding")
        return list(response.data[0].embedding)
