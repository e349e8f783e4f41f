from abc import ABC, abstractmethod
from typing import Dict, List


class LLMService(ABC):
    """Text-completion boundary used by the insight pipeline."""

    @abstractmethod
    async def generate_response(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0.7,
        max_tokens: int = 500,
    ) -> str:
        """Return the completion text.

        Raises CompletionServiceError on transport failures, timeouts and
        responses without completion text.
        """
        ...
