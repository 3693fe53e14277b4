"""Provider contracts."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(slots=True)
class ModelResponse:
    text: str
    model: str = ""


class ModelProvider(Protocol):
    async def generate(
        self,
        messages: list[dict[str, str]],
        temperature: float = 0.7,
        max_tokens: int = 300,
        json_mode: bool = False,
    ) -> ModelResponse: ...

    async def health_check(self) -> bool: ...
