from functools import lru_cache
from typing import Optional

from .config import settings
from ..services.store import DatasetStore, build_store
from ..utils.api_client import LLMClient


@lru_cache(maxsize=1)
def get_store() -> DatasetStore:
    return build_store(settings.store_backend, settings.store_path)


def get_llm_client() -> Optional[LLMClient]:
    """None when no API key is configured."""
    if not settings.openai_api_key:
        return None
    return LLMClient(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        model=settings.openai_model,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
        timeout=settings.llm_timeout,
    )
