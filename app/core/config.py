"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Keeps the rest of the app decoupled from how config is sourced.
"""

import os

from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"

# Gemini generateContent endpoint
GEMINI_API_KEY_NAME: str = "GEMINI_API_KEY"
GEMINI_API_BASE: str = (
    os.getenv("GEMINI_API_BASE", "https://generativelanguage.googleapis.com/v1beta").strip().rstrip("/")
    or "https://generativelanguage.googleapis.com/v1beta"
)
GEMINI_MODEL: str = (
    os.getenv("GEMINI_MODEL", "gemini-1.5-flash-preview-0514").strip()
    or "gemini-1.5-flash-preview-0514"
)
GEMINI_API_URL: str = f"{GEMINI_API_BASE}/models/{GEMINI_MODEL}:generateContent"

# Caller auth: comma-separated "uid:token" pairs accepted as bearer tokens
CALLER_TOKENS: str = os.getenv("CALLER_TOKENS", "").strip()

# Persona and rules sent as the upstream system instruction (never built from caller input)
SYSTEM_PROMPT: str = (
    "You are Pregnancy Pal, a cautious AI assistant. Summarize web search results about "
    "safety for pregnant women. Rules: 1. Base summary ONLY on provided Google Search results. "
    "2. Be clear, balanced, and easy to understand. 3. If sources conflict, state it. "
    "4. Use neutral language. 5. **Do NOT give direct medical advice.** "
    "6. Keep summary to 1-2 concise paragraphs."
)

# Caller-facing messages
NO_SUMMARY_MESSAGE: str = (
    "The AI analysis completed, but no summary could be generated. This might happen for "
    "very broad or unanswerable queries. Please try a more specific search."
)
UNAUTHENTICATED_MESSAGE: str = "The function must be called while authenticated."
MISSING_QUERY_MESSAGE: str = "The function must be called with a 'query' argument."
INTERNAL_ERROR_MESSAGE: str = "Failed to call Gemini API."

# Upstream error bodies are logged, truncated to this many characters
ERROR_BODY_LOG_LIMIT: int = 500
