"""AI summarization for MindVault.

Sends a single chat-completion request to a DeepSeek (OpenAI-compatible)
endpoint and returns a summary plus suggested tags. Configuration is read
from ~/.mindvault/config.toml and MINDVAULT_DEEPSEEK_* environment variables.

Example config.toml:
    [llm.deepseek]
    api_key = "your-api-key"
    base_url = "https://api.deepseek.com"
    default_model = "deepseek-chat"
    timeout = 30.0
"""

from .client import (
    SummarizationClient,
    analyze_content,
    build_prompt,
    error_fallback,
    interpret_reply,
    local_fallback,
)
from .config import (
    DeepSeekConfig,
    LLMConfig,
    get_example_config,
    load_config,
    save_config,
)

__all__ = [
    "DeepSeekConfig",
    "LLMConfig",
    "SummarizationClient",
    "analyze_content",
    "build_prompt",
    "error_fallback",
    "get_example_config",
    "interpret_reply",
    "load_config",
    "local_fallback",
    "save_config",
]
