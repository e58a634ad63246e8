"""Constants for the summarization client.

Centralizes endpoint details, default values, and marker tags.
"""

# =============================================================================
# Endpoint
# =============================================================================

SERVICE_NAME = "DeepSeek"
DEFAULT_BASE_URL = "https://api.deepseek.com"
CHAT_COMPLETIONS_PATH = "/chat/completions"
DEFAULT_MODEL = "deepseek-chat"
SYSTEM_PROMPT = "You are a helpful assistant."

# =============================================================================
# Prompt Processing
# =============================================================================

# Maximum prompt length (chars); longer pasted content is truncated.
MAX_PROMPT_LENGTH = 8000

# =============================================================================
# Timeout Settings (seconds)
# =============================================================================

# A hung request would otherwise block resource creation indefinitely.
DEFAULT_API_TIMEOUT = 30.0

# =============================================================================
# HTTP Client Settings
# =============================================================================

HTTP_MAX_CONNECTIONS = 10
HTTP_KEEPALIVE_TIMEOUT = 30.0

# =============================================================================
# Fallback markers
# =============================================================================

# Stand-in for an empty title in prompts and marker tags
UNTITLED_MARKER = "Untitled"
UNCATEGORIZED_TAG = "uncategorized"
LOCAL_SUMMARY_TAGS = ("no-ai", "local-summary")
ERROR_TAGS = ("ai-error", SERVICE_NAME)
