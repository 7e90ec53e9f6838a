"""Upstage API constants."""

DEFAULT_BASE_URL = "https://api.upstage.ai/v1"

# Endpoint paths relative to the base URL
API_ENDPOINTS = {
    "chat_completions": "/chat/completions",
    "embeddings": "/embeddings",
    "models": "/models",
    "document_parsing": "/parse",
    "information_extraction": "/extract",
}

SUPPORTED_MODELS = ["solar-mini", "solar-pro", "solar-pro2"]

SUPPORTED_EMBEDDING_MODELS = ["embedding-query", "embedding-passage"]

MESSAGE_ROLES = ("system", "user", "assistant")

DEFAULT_VALUES = {
    "temperature": 0.7,
    "max_tokens": 1000,
    "top_p": 1.0,
    "request_timeout_ms": 30000,
}

# Inclusive numeric bounds for chat options
OPTION_BOUNDS: dict[str, tuple[float, float]] = {
    "temperature": (0, 2),
    "top_p": (0, 1),
    "frequency_penalty": (-2, 2),
    "presence_penalty": (-2, 2),
    "max_tokens": (1, 4000),
}

VALIDATION_RULES = {
    "max_messages": 100,
    "max_embedding_inputs": 100,
}

# Checked in order, first non-empty value wins
PROXY_ENV_VARS = ("HTTPS_PROXY", "https_proxy", "HTTP_PROXY", "http_proxy")
