# culturix/core/chat_proxy.py

import logging
import requests

from culturix import config
from culturix.core.errors import InternalError, UpstreamError, ValidationError


logger = logging.getLogger(__name__)


SYSTEM_PROMPT = (
    'You are a helpful and knowledgeable cultural assistant for the website "Culturix".\n'
    "Your goal is to answer questions about cultures, festivals, traditions, and moods.\n\n"
    "Examples of user queries:\n"
    '- "Tell me about Diwali"\n'
    "- \"What festivals are in the 'Spiritual' mood?\"\n"
    '- "What is the origin of Thanksgiving?"\n\n'
    "Please provide concise, accurate, and engaging responses."
)


def build_payload(message: str) -> dict:
    return {
        "model": config.OPENROUTER_MODEL,
        "max_tokens": config.CHAT_MAX_TOKENS,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": message},
        ],
    }


def build_headers() -> dict:
    return {
        "Authorization": f"Bearer {config.OPENROUTER_API_KEY}",
        "HTTP-Referer": config.OPENROUTER_REFERER,
        "X-Title": config.OPENROUTER_TITLE,
        "Content-Type": "application/json",
    }


def _upstream_error(response: requests.Response, data) -> UpstreamError | None:
    error = data.get("error") if isinstance(data, dict) else None
    if not error and response.ok:
        return None

    if isinstance(error, dict):
        message = error.get("message") or "Failed to generate response"
    elif isinstance(error, str) and error:
        message = error
    else:
        message = "Failed to generate response"

    return UpstreamError(message, details=error or data, status_code=response.status_code)


def chat(message: str | None) -> str:
    """
    Sends one user message to the chat-completion upstream and returns the
    first completion's text unchanged.

    Raises ValidationError for an empty message (no upstream call is made),
    UpstreamError when the upstream reports a failure, and InternalError for
    transport failures or an unexpected payload. Nothing is retried.
    """
    if not message:
        raise ValidationError("Message is required")

    try:
        response = requests.post(
            config.OPENROUTER_URL,
            headers=build_headers(),
            json=build_payload(message),
            timeout=config.UPSTREAM_TIMEOUT,
        )
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.error("Error with AI API: %s", e)
        raise InternalError("Internal Server Error", details=str(e))

    error = _upstream_error(response, data)
    if error is not None:
        logger.error("OpenRouter API Error (%s): %s", response.status_code, error.details)
        raise error

    try:
        return data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        logger.error("Unexpected OpenRouter payload: %r", data)
        raise InternalError("Internal Server Error", details=f"Malformed upstream response: {e!r}")
