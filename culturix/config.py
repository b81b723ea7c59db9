# culturix/config.py

import os
from dotenv import load_dotenv


load_dotenv()


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# -------------------------------
# Server
# -------------------------------

PORT = int(os.getenv("PORT", "3000"))
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./culturix.db")


# -------------------------------
# Sessions
# -------------------------------

SESSION_SECRET = os.getenv("SESSION_SECRET") or "secret-key"
SESSION_SECRET_IS_DEFAULT = not os.getenv("SESSION_SECRET")
SESSION_ALGORITHM = "HS256"
SESSION_COOKIE_NAME = "culturix_session"
SESSION_TTL_MINUTES = int(os.getenv("SESSION_TTL_MINUTES", "1440"))
COOKIE_SECURE = _env_flag("COOKIE_SECURE")


# -------------------------------
# Chat upstream (OpenRouter)
# -------------------------------

OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY") or os.getenv("GEMINI_API_KEY")
OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"
OPENROUTER_MODEL = os.getenv("OPENROUTER_MODEL", "xiaomi/mimo-v2-flash")
OPENROUTER_REFERER = "http://localhost:3000"
OPENROUTER_TITLE = "Culturix"
CHAT_MAX_TOKENS = 1000

# None means requests waits for the upstream indefinitely.
UPSTREAM_TIMEOUT = None
