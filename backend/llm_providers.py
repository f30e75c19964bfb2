import os
from json.decoder import JSONDecodeError
from openai import OpenAI
from typing import Dict, Any, Optional


DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "google/gemini-2.5-flash"


def _sanitize_env_value(value: Optional[str]) -> Optional[str]:
    """
    Clean up env-provided strings that may include surrounding quotes or whitespace.

    Some shells/export flows set values like OPENROUTER_API_KEY="sk-or-...".
    The OpenAI SDK forwards the raw string, so we strip wrapping quotes here
    to avoid 401s that look like "No cookie auth credentials found".
    """
    if value is None:
        return None
    cleaned = value.strip()
    if len(cleaned) >= 2 and (
        (cleaned[0] == '"' and cleaned[-1] == '"') or (cleaned[0] == "'" and cleaned[-1] == "'")
    ):
        cleaned = cleaned[1:-1].strip()
    return cleaned


class LLMProviderInterface:
    """
    A common interface for LLM calls.
    Model name is stored during initialization.
    """
    def get_response(self, prompt: str, system_prompt: Optional[str] = None) -> Dict[str, Any]:
        raise NotImplementedError("Subclasses should implement this method.")

    @staticmethod
    def extract_api_kwargs(config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Extracts fields not part of the standard internal configuration
        into a dictionary suitable for passing as kwargs to the underlying API call.
        """
        api_kwargs = {}
        # Fields used to build the client, not passed to the API directly
        known_fields = {
            'name', 'provider', 'kwargs', 'model_name',
            'timeout', 'max_retries', 'base_url',
        }

        api_kwargs.update(config.get('kwargs', {}))

        for field_name, value in config.items():
            if field_name in known_fields:
                continue
            api_kwargs[field_name] = value

        return api_kwargs


class OpenRouterProvider(LLMProviderInterface):
    """
    Chat-completions provider for any OpenRouter (OpenAI-compatible) model.

    Timeouts and retries are delegated to the OpenAI client: every request
    is bounded by `timeout` seconds and retried up to `max_retries` times
    on connection errors and 429/5xx responses.
    """

    def __init__(self, api_key: str, config: Dict[str, Any]):
        raw_base_url = config.get('base_url') or os.getenv("OPENROUTER_BASE_URL")
        base_url = _sanitize_env_value(raw_base_url) or DEFAULT_BASE_URL
        self.timeout = float(config.get('timeout', 10.0))
        self.max_retries = int(config.get('max_retries', 2))
        self.client = OpenAI(
            api_key=_sanitize_env_value(api_key) or api_key,
            base_url=base_url,
            timeout=self.timeout,
            max_retries=self.max_retries,
        )
        self.model_name = config.get('model_name') or DEFAULT_MODEL
        self.api_kwargs = self.extract_api_kwargs(config)

        explicit_headers = self.api_kwargs.pop('extra_headers', None)
        env_headers = {}
        referer = os.getenv("OPENROUTER_SITE_URL")
        title = os.getenv("OPENROUTER_SITE_NAME", "NeonSnake")
        if referer:
            env_headers["HTTP-Referer"] = referer
        if title:
            env_headers["X-Title"] = title
        if explicit_headers:
            env_headers.update(explicit_headers)
        self.extra_headers = env_headers or None

    def get_response(self, prompt: str, system_prompt: Optional[str] = None) -> Dict[str, Any]:
        request_kwargs = dict(self.api_kwargs)
        if self.extra_headers:
            request_kwargs['extra_headers'] = self.extra_headers

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        try:
            response = self.client.chat.completions.create(
                model=self.model_name,
                messages=messages,
                **request_kwargs,
            )
        except JSONDecodeError as exc:
            raise ValueError(
                "OpenRouter chat completion returned a non-JSON payload. "
                "This usually means the model slug is invalid or the request was redirected to an HTML error page."
            ) from exc

        usage = response.usage if hasattr(response, 'usage') else None
        content = response.choices[0].message.content if response.choices else None

        return {
            "text": (content or "").strip(),
            "input_tokens": usage.prompt_tokens if usage else 0,
            "output_tokens": usage.completion_tokens if usage else 0
        }


def commentary_config_from_env() -> Dict[str, Any]:
    """Provider config for the commentator, read from the environment."""
    return {
        'name': 'commentary',
        'model_name': _sanitize_env_value(os.getenv("COMMENTARY_MODEL")) or DEFAULT_MODEL,
        'timeout': float(os.getenv("COMMENTARY_TIMEOUT_SECONDS", "10")),
        'max_retries': int(os.getenv("COMMENTARY_MAX_RETRIES", "2")),
        'temperature': 0.8,
        'max_tokens': 50,
    }


def create_llm_provider(config: Dict[str, Any]) -> Optional[LLMProviderInterface]:
    """
    Factory function for creating an LLM provider instance.
    All models route through OpenRouter. Returns None when no API key is
    configured so callers can run offline.
    """
    openrouter_api_key = _sanitize_env_value(os.getenv("OPENROUTER_API_KEY"))
    if not openrouter_api_key:
        return None

    return OpenRouterProvider(api_key=openrouter_api_key, config=config)
