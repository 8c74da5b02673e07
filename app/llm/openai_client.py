from typing import Any

from openai import OpenAI
from app.llm.llm_client import LLMClient


class OpenAIClient(LLMClient):
    def __init__(self, model_name: str, temperature: float = 0.0, max_tokens: int | None = None):
        self.model_name = model_name
        self.temperature = temperature
        self.max_tokens = max_tokens
        # Liest OPENAI_API_KEY automatisch aus der Umgebung
        self.client = OpenAI()

    def complete(self, prompt: str, system: str | None = None, **kwargs: Any) -> str:
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        params: dict[str, Any] = {
            "model": kwargs.pop("model", None) or self.model_name,
            "messages": messages,
            "temperature": kwargs.pop("temperature", self.temperature),
        }
        max_tokens = kwargs.pop("max_tokens", self.max_tokens)
        if max_tokens is not None:
            params["max_tokens"] = max_tokens
        # z.B. response_format für Structured Output
        params.update(kwargs)

        response = self.client.chat.completions.create(**params)

        return response.choices[0].message.content or ""
