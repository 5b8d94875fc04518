from typing import Optional

from panelgen.core.config import settings
from panelgen.llm.openai_client import OpenAIClient
from panelgen.llm.gemini_client import GeminiClient


def get_llm(model_name: Optional[str] = None):
    """Panel source client for a model name; "llm" or no name picks the configured default"""
    if not model_name or model_name == "llm":
        model_name = settings.DEFAULT_LLM_MODEL

    if model_name.startswith("gpt"):
        return OpenAIClient(model_name)
    if model_name.startswith("gemini"):
        return GeminiClient(model_name)
    raise ValueError(f"Unknown model: {model_name}")
