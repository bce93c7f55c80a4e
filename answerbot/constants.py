"""
Tunables and fixed user-facing messages.
"""
import os

# MongoDB
MONGODB_SERVER_SELECTION_TIMEOUT_MS = 5000
MONGODB_DATABASE_NAME = os.getenv("MONGODB_DATABASE", "answerbot")

# Knowledge matching
# Empirical cutoff for the cosine fallback, not derived. Tune per knowledge base.
DEFAULT_MATCH_THRESHOLD = float(os.getenv("MATCH_THRESHOLD", "0.3"))
MAX_CONTEXT_ENTRIES = 3

# Inbound messages
MAX_QUERY_LENGTH = 1000

# OpenAI
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
OPENAI_API_TIMEOUT_SECONDS = 15.0
OPENAI_TEMPERATURE = 0.2

# response_mode -> temperature
RESPONSE_MODE_TEMPERATURES = {
    "precise": OPENAI_TEMPERATURE,
    "balanced": 0.5,
    "creative": 0.7,
}

# max_response_length -> max_tokens
RESPONSE_LENGTH_TOKENS = {
    "short": 150,
    "medium": 350,
    "long": 700,
}

# Rate limiting of generative calls, per user
RATE_LIMIT_AI_MAX = int(os.getenv("RATE_LIMIT_AI_MAX", "50"))
RATE_LIMIT_AI_WINDOW_SECONDS = int(os.getenv("RATE_LIMIT_AI_WINDOW_SECONDS", "86400"))  # 24 hours

# Slack attachment colours
DEFAULT_EMBED_COLOR = "#00B0F4"
AI_EMBED_COLOR = "#9B59B6"
CATEGORY_COLORS = {
    "beliefs": "#2D7D46",
    "history": "#5865F2",
    "ai": AI_EMBED_COLOR,
}

DIRECT_MESSAGE_CHANNEL = "direct_message"

# User-facing messages
COMMAND_ERROR_MESSAGE = "There was an error executing that command. Please try again later."
AI_DISABLED_MESSAGE = (
    "I don't have information about that topic in my knowledge base. "
    "AI responses are currently disabled."
)
AI_UNAVAILABLE_MESSAGE = (
    "I'm sorry, I don't have information about that topic "
    "and my AI capabilities are currently unavailable."
)
AI_WARMING_UP_MESSAGE = "The AI model is currently busy. Please try again in a few moments."
AI_LABEL = "_This is an AI-generated response_"
DIRECT_MESSAGE_ERROR_MESSAGE = (
    "I seem to be having a technical difficulty. "
    "Please give me a moment and try again."
)
