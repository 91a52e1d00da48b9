"""Utility functions for the hosted language model"""
import os
from typing import Dict

from langchain_openai import ChatOpenAI

from config import Config
from services.errors import ConfigurationError

# Disable LangSmith tracing to avoid 403 errors
# Enable only when a valid LANGCHAIN_API_KEY is configured.
os.environ["LANGCHAIN_TRACING_V2"] = "false"


# Cache LLM instances to avoid recreation
_llm_cache: Dict[tuple[str, float, int], ChatOpenAI] = {}


def get_llm(
    model: str = Config.WAITLIST_MODEL,
    temperature: float = 0,
    max_tokens: int = 2000,
) -> ChatOpenAI:
    """Get LLM client with standard configuration"""
    api_key = os.getenv("OPENAI_API_KEY") or Config.OPENAI_API_KEY
    if not api_key:
        raise ConfigurationError("OPENAI_API_KEY environment variable is not set")

    cache_key = (model, temperature, max_tokens)
    if cache_key not in _llm_cache:
        _llm_cache[cache_key] = ChatOpenAI(
            model=model,
            temperature=temperature,
            api_key=api_key,
            base_url=Config.OPENAI_BASE_URL or None,
            max_tokens=max_tokens,
            timeout=30,  # Add timeout to prevent hanging
        )
    return _llm_cache[cache_key]
