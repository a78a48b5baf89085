"""Text-generation clients for report writing.

The report requester talks to a generative-text service through the small
``TextGenerationClient`` interface so tests can substitute a fake.
``GeminiTextClient`` is the production implementation on top of
``google-genai``.
"""

import logging
import os
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TIMEOUT_SECONDS = 60.0

API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY")
MODEL_ENV_VAR = "OMICS_DASHBOARD_MODEL"
TIMEOUT_ENV_VAR = "OMICS_DASHBOARD_TIMEOUT"


class ExternalServiceError(RuntimeError):
    """Any failure reaching or receiving from the text-generation service."""


def _resolve_api_key(api_key: str | None) -> str | None:
    """Resolve the API key from argument or environment.

    Resolution order:
    1. Explicitly provided key (if not None)
    2. GEMINI_API_KEY, GOOGLE_API_KEY, API_KEY environment variables

    Returns None when no key is available; the request fails later, not the
    process.
    """
    if api_key is not None:
        return api_key
    for name in API_KEY_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    return None


def _resolve_model(model: str | None) -> str:
    if model is not None:
        return model
    return os.environ.get(MODEL_ENV_VAR) or DEFAULT_MODEL


def _resolve_timeout(timeout_seconds: float | None) -> float:
    if timeout_seconds is not None:
        return float(timeout_seconds)
    env_value = os.environ.get(TIMEOUT_ENV_VAR)
    if env_value:
        try:
            return float(env_value)
        except ValueError:
            logger.warning(f"Ignoring invalid {TIMEOUT_ENV_VAR}={env_value!r}")
    return DEFAULT_TIMEOUT_SECONDS


class TextGenerationClient(ABC):
    """Abstract single-call text generator."""

    @abstractmethod
    def generate(
        self,
        contents: str,
        *,
        system_instruction: str | None = None,
        temperature: float = 0.3,
    ) -> str:
        """Generate text.

        Parameters
        ----------
        contents : str
            Short content request
        system_instruction : str, optional
            System instruction steering the model
        temperature : float
            Sampling temperature

        Returns
        -------
        str
            Generated text (may be empty)

        Raises
        ------
        ExternalServiceError
            If the service cannot be reached or returns no usable response
        """


class GeminiTextClient(TextGenerationClient):
    """Google Gemini client.

    API key resolution order:
    1. Explicitly provided `api_key` argument
    2. `GEMINI_API_KEY`, `GOOGLE_API_KEY`, `API_KEY` environment variables

    Example:
        >>> client = GeminiTextClient()
        >>> text = client.generate(
        ...     "Generate a bioinformatics analysis report",
        ...     system_instruction="You are an expert bioinformatician.",
        ... )
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout_seconds: float | None = None,
    ):
        self.api_key = _resolve_api_key(api_key)
        self.model = _resolve_model(model)
        self.timeout_seconds = _resolve_timeout(timeout_seconds)
        self._client = None

    @property
    def client(self):
        """Get or create the google-genai client."""
        if self._client is None:
            if not self.api_key:
                raise ExternalServiceError(
                    "API key not found in environment variables. "
                    f"Set one of: {', '.join(API_KEY_ENV_VARS)}"
                )
            from google import genai
            from google.genai import types

            self._client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=int(self.timeout_seconds * 1000)),
            )
        return self._client

    def generate(
        self,
        contents: str,
        *,
        system_instruction: str | None = None,
        temperature: float = 0.3,
    ) -> str:
        client = self.client
        from google.genai import types

        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            temperature=temperature,
        )

        logger.info(f"Requesting report from {self.model} (temperature={temperature})")
        try:
            response = client.models.generate_content(
                model=self.model,
                contents=contents,
                config=config,
            )
        except Exception as e:
            raise ExternalServiceError(f"Gemini request failed: {e}") from e

        try:
            text = response.text
        except (AttributeError, ValueError) as e:
            raise ExternalServiceError(f"Response has no text content: {e}") from e

        return text or ""
