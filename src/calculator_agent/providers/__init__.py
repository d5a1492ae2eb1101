from calculator_agent.providers.base import (
    ChatOptions,
    ChatProvider,
    ProviderReply,
    Usage,
)
from calculator_agent.providers.http import HttpChatProvider

__all__ = [
    "ChatOptions",
    "ChatProvider",
    "HttpChatProvider",
    "ProviderReply",
    "Usage",
]
