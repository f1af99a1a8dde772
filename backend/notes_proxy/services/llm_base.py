"""
Notes Proxy — Abstract LLM Service Interface
=============================================

What:  Abstract base class defining the contract for text generation providers.
How:   Concrete implementations inherit from LLMService and implement generate().
Who:   Called by ProxyService once per revise/synthesize request.
"""

from abc import ABC, abstractmethod


class LLMService(ABC):
    """
    Abstract interface for text generation from a single prompt.

    Contract:
        - generate() accepts the final prompt and returns the model's text verbatim
        - No retries: one call per request
        - Provider-specific errors are translated into GenerationBlockedError
          or GenerationFailedError before leaving the implementation

    Implementations:
        - GeminiService: Google Gemini API
    """

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """
        Send a prompt to the model and return its text response.

        Args:
            prompt: The complete prompt built by the prompt builder.

        Returns:
            str: The generated text, unmodified (no trimming or re-formatting).

        Raises:
            GenerationBlockedError: The provider withheld the output. The
                provider's reason is carried when available.
            GenerationFailedError: Network error, timeout, malformed provider
                response or missing content.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the provider is reachable and the credential is accepted.

        Returns: True if the service is reachable, False otherwise.
        """
        ...
