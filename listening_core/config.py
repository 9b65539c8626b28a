"""Runtime settings read from the environment."""
import os

# Coaching model endpoint (OpenAI-compatible chat completions)
COACH_API_URL = os.getenv("LISTENING_COACH_API_URL", "https://api.openai.com/v1/chat/completions")
COACH_MODEL = os.getenv("LISTENING_COACH_MODEL", "gpt-4o-mini")
COACH_TIMEOUT = float(os.getenv("LISTENING_COACH_TIMEOUT", "20"))
COACH_TEMPERATURE = 0.6
COACH_MAX_TOKENS = 280
COACH_API_KEY_ENV = "OPENAI_API_KEY"

# Upper bound on transcript / attempt size accepted by the HTTP layer
MAX_INPUT_TOKENS = int(os.getenv("LISTENING_MAX_TOKENS", "400"))

# Insight cache size for the HTTP layer
INSIGHT_CACHE_SIZE = int(os.getenv("LISTENING_INSIGHT_CACHE_SIZE", "512"))
