"""OpenAI chat completions client."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from calorie_tracker.services.rag import ChatClient


@dataclass
class OpenAIChatClient(ChatClient):
    """Chat client backed by the OpenAI chat completions API."""

    client: AsyncOpenAI
    model: str

    @classmethod
    def create(cls, api_key: str, model: str) -> "OpenAIChatClient":
        """Create a chat client with its own OpenAI session."""
        return cls(client=AsyncOpenAI(api_key=api_key), model=model)

    async def complete(self, prompt: str, temperature: float) -> str:
        """Send a single-turn prompt and return the generated text."""
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
        )
        if not response.choices:
            raise RuntimeError("OpenAI returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise RuntimeError("OpenAI returned an empty response")
        return content
