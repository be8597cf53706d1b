"""
LLM Client Module for AWS Bedrock Claude Integration
Provides thread-safe, retry-enabled LLM client using Boto3
"""
from __future__ import annotations

import json
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from botocore.exceptions import BotoCoreError, ClientError

from ..config import LLMConfig, LLMProvider
from ..utils import get_logger, LLMError, SchemaForgeMetrics

logger = get_logger(__name__)

# Bedrock error codes worth another attempt
RETRYABLE_ERROR_CODES = frozenset({
    "ThrottlingException",
    "ServiceUnavailableException",
    "ModelTimeoutException",
    "InternalServerException",
    "TooManyRequestsException",
})


@dataclass
class LLMResponse:
    """LLM response representation"""
    content: str
    model_id: str
    input_tokens: int = 0
    output_tokens: int = 0
    stop_reason: Optional[str] = None
    latency_ms: float = 0.0
    raw_response: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": self.content,
            "model_id": self.model_id,
            "input_tokens": self.input_tokens,
            "output_tokens": self.output_tokens,
            "stop_reason": self.stop_reason,
            "latency_ms": self.latency_ms,
        }


class BaseLLMClient(ABC):
    """Abstract base class for LLM clients"""

    @abstractmethod
    def invoke(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        **kwargs
    ) -> LLMResponse:
        """Invoke the LLM with a prompt"""
        pass

    @abstractmethod
    def invoke_with_retry(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_retries: Optional[int] = None,
        **kwargs
    ) -> LLMResponse:
        """Invoke the LLM with automatic retry on failure"""
        pass


class BedrockClaudeClient(BaseLLMClient):
    """
    AWS Bedrock Claude Client
    Thread-safe client for interacting with Claude via AWS Bedrock
    """

    def __init__(self, config: LLMConfig):
        self.config = config
        self._client = None
        self._lock = threading.Lock()

    def _get_client(self):
        """Get or create Boto3 Bedrock client (lazy initialization)"""
        if self._client is None:
            with self._lock:
                if self._client is None:
                    import boto3
                    from botocore.config import Config

                    boto_config = Config(
                        region_name=self.config.aws_region,
                        retries={
                            'max_attempts': 0,  # retries are handled in invoke_with_retry
                            'mode': 'standard'
                        },
                        connect_timeout=30,
                        read_timeout=self.config.request_timeout,
                    )

                    session_kwargs = {}
                    if self.config.aws_access_key_id:
                        session_kwargs['aws_access_key_id'] = self.config.aws_access_key_id.get_secret_value()
                    if self.config.aws_secret_access_key:
                        session_kwargs['aws_secret_access_key'] = self.config.aws_secret_access_key.get_secret_value()
                    if self.config.aws_session_token:
                        session_kwargs['aws_session_token'] = self.config.aws_session_token.get_secret_value()

                    session = boto3.Session(region_name=self.config.aws_region, **session_kwargs)
                    self._client = session.client('bedrock-runtime', config=boto_config)

                    logger.info(
                        "Initialized Bedrock client",
                        extra={"extra_fields": {
                            "region": self.config.aws_region,
                            "model_id": self.config.model_id
                        }}
                    )

        return self._client

    def invoke(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        **kwargs
    ) -> LLMResponse:
        """
        Invoke Claude via Bedrock

        Args:
            prompt: User prompt
            system_prompt: Optional system prompt
            **kwargs: max_tokens / temperature overrides

        Returns:
            LLMResponse with generated content
        """
        client = self._get_client()

        request_body = {
            "anthropic_version": "bedrock-2023-05-31",
            "max_tokens": kwargs.get("max_tokens", self.config.max_tokens),
            "temperature": kwargs.get("temperature", self.config.generation_temperature),
            "messages": [{"role": "user", "content": prompt}],
        }
        if system_prompt:
            request_body["system"] = system_prompt

        start_time = time.time()

        try:
            response = client.invoke_model(
                modelId=self.config.model_id,
                body=json.dumps(request_body),
                contentType="application/json",
                accept="application/json",
            )
            response_body = json.loads(response['body'].read())
        except (ClientError, BotoCoreError, ValueError) as e:
            latency_ms = (time.time() - start_time) * 1000
            logger.error(
                f"LLM invocation failed: {e}",
                extra={"extra_fields": {"latency_ms": latency_ms}}
            )
            raise LLMError(
                message=f"Bedrock Claude invocation failed: {e}",
                model_id=self.config.model_id,
                original_error=e
            )

        latency_ms = (time.time() - start_time) * 1000

        content = "".join(
            block.get("text", "")
            for block in response_body.get("content") or []
            if block.get("type") == "text"
        )

        usage = response_body.get("usage", {})
        input_tokens = usage.get("input_tokens", 0)
        output_tokens = usage.get("output_tokens", 0)

        SchemaForgeMetrics.record_llm_call(
            duration=latency_ms / 1000,
            model_id=self.config.model_id,
            input_tokens=input_tokens,
            output_tokens=output_tokens
        )

        logger.debug(
            "LLM invocation successful",
            extra={"extra_fields": {
                "input_tokens": input_tokens,
                "output_tokens": output_tokens,
                "latency_ms": latency_ms
            }}
        )

        return LLMResponse(
            content=content,
            model_id=self.config.model_id,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            stop_reason=response_body.get("stop_reason"),
            latency_ms=latency_ms,
            raw_response=response_body,
        )

    def invoke_with_retry(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_retries: Optional[int] = None,
        **kwargs
    ) -> LLMResponse:
        """
        Invoke Claude with automatic retry on failure

        Uses exponential backoff; only throttling and transient errors are retried
        """
        retries = max_retries if max_retries is not None else self.config.retry_attempts
        last_error = None

        for attempt in range(retries):
            try:
                return self.invoke(prompt, system_prompt, **kwargs)
            except LLMError as e:
                last_error = e

                if not self._is_retryable_error(e):
                    raise

                if attempt < retries - 1:
                    delay = self.config.retry_delay * (2 ** attempt)
                    logger.warning(
                        f"LLM invocation failed, retrying in {delay}s",
                        extra={"extra_fields": {
                            "attempt": attempt + 1,
                            "max_retries": retries,
                            "error": str(e)
                        }}
                    )
                    time.sleep(delay)

        raise LLMError(
            message=f"LLM invocation failed after {retries} attempts",
            model_id=self.config.model_id,
            original_error=last_error
        )

    def _is_retryable_error(self, error: LLMError) -> bool:
        """Check if error is retryable"""
        original = error.original_error

        if isinstance(original, ClientError):
            code = original.response.get("Error", {}).get("Code", "")
            if code in RETRYABLE_ERROR_CODES:
                return True

        error_str = str(original).lower() if original else ""
        retryable_patterns = [
            "throttling",
            "rate limit",
            "too many requests",
            "service unavailable",
            "timeout",
            "timed out",
            "connection",
        ]
        return any(pattern in error_str for pattern in retryable_patterns)


class LLMClientFactory:
    """Factory for creating LLM clients"""

    _clients: Dict[str, BaseLLMClient] = {}
    _lock = threading.Lock()

    @classmethod
    def get_client(cls, config: LLMConfig) -> BaseLLMClient:
        """
        Get or create LLM client instance

        Uses singleton pattern per configuration
        """
        provider = getattr(config.provider, "value", config.provider)
        key = f"{provider}_{config.model_id}_{config.aws_region}"

        if key not in cls._clients:
            with cls._lock:
                if key not in cls._clients:
                    if provider == LLMProvider.BEDROCK_CLAUDE.value:
                        cls._clients[key] = BedrockClaudeClient(config)
                    else:
                        raise ValueError(f"Unsupported LLM provider: {provider}")

        return cls._clients[key]

    @classmethod
    def clear_clients(cls) -> None:
        """Clear all cached clients"""
        with cls._lock:
            cls._clients.clear()


def get_llm_client(config: LLMConfig) -> BaseLLMClient:
    """Get LLM client instance"""
    return LLMClientFactory.get_client(config)
