import logging
import httpx
from openai import AsyncOpenAI

from app.config import (
    OPENROUTER_BASE_URL,
    API_TIMEOUT,
    API_CONNECT_TIMEOUT,
)

logger = logging.getLogger(__name__)


def build_openrouter_client(
    api_key: str,
    base_url: str = OPENROUTER_BASE_URL,
    timeout: float = API_TIMEOUT,
    connect_timeout: float = API_CONNECT_TIMEOUT,
) -> AsyncOpenAI:
    """OpenRouter client for Gemini Flash, with an explicit httpx timeout"""
    http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(
            connect=connect_timeout,
            read=timeout,
            write=timeout,
            pool=timeout
        )
    )
    client = AsyncOpenAI(
        base_url=base_url,
        api_key=api_key,
        http_client=http_client,
    )
    logger.info(f"OpenRouter client initialized with {timeout}s timeout")
    return client
