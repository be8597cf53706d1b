"""
LLM Client Package

Provides integration with AWS Bedrock Claude models through boto3.
"""
from .bedrock_client import (
    LLMResponse,
    BaseLLMClient,
    BedrockClaudeClient,
    LLMClientFactory,
    get_llm_client,
)

__all__ = [
    # Data models
    "LLMResponse",

    # Base class
    "BaseLLMClient",

    # Client implementations
    "BedrockClaudeClient",

    # Factory
    "LLMClientFactory",
    "get_llm_client",
]
