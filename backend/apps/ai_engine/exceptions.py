"""
Errors raised while talking to the generation model.

They never reach the HTTP caller: the generator turns them into the
offline fallback tier.
"""


class GenerationError(Exception):
    """Base class for generation failures."""


class GeminiConfigurationError(GenerationError):
    """No API key configured."""


class GeminiAPIError(GenerationError):
    """Network failure, HTTP error or an unexpected response envelope."""
