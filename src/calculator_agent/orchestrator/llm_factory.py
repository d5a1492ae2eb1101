from __future__ import annotations

from calculator_agent.config.settings import Settings
from calculator_agent.errors import ConfigurationError
from calculator_agent.providers.base import ChatProvider
from calculator_agent.providers.http import HttpChatProvider


class LLMFactory:
    @staticmethod
    def create_provider(settings: Settings) -> ChatProvider:
        backend = settings.llm_backend.strip().lower()

        if backend == "http":
            return HttpChatProvider(
                api_key=settings.github_token,
                base_url=settings.provider_base_url,
            )

        if backend == "langchain":
            from langchain_openai import ChatOpenAI

            from calculator_agent.providers.langchain import LangChainChatProvider

            return LangChainChatProvider(
                ChatOpenAI(
                    model=settings.default_model,
                    api_key=settings.github_token,
                    base_url=settings.provider_base_url,
                    temperature=settings.ai_temperature,
                    max_tokens=settings.ai_max_tokens,
                    timeout=settings.ai_timeout_ms / 1000,
                    max_retries=0,
                )
            )

        raise ConfigurationError("Unsupported LLM_BACKEND. Use 'http' or 'langchain'.")
