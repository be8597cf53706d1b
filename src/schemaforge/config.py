"""
Configuration Management for SchemaForge
Uses Pydantic for validation and type safety
"""
from __future__ import annotations

import json
import os
from enum import Enum
from pathlib import Path
from typing import Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from .utils.errors import ConfigurationError


class FormLibrary(str, Enum):
    """Form management library for generated form bindings"""
    REACT_HOOK_FORM = "react-hook-form"
    NATIVE = "native"


class OrmStyle(str, Enum):
    """Data access layer used in generated routers"""
    PRISMA = "prisma"
    DRIZZLE = "drizzle"


class ApiStyle(str, Enum):
    """Generated API router flavour"""
    TRPC = "trpc"
    REST = "rest"


class LLMProvider(str, Enum):
    """Supported LLM providers"""
    BEDROCK_CLAUDE = "bedrock_claude"


class LogLevel(str, Enum):
    """Log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class GenerationConfig(BaseModel):
    """Options consumed read-only by every generator"""
    form_library: FormLibrary = FormLibrary.REACT_HOOK_FORM
    orm_style: OrmStyle = OrmStyle.PRISMA
    api_style: ApiStyle = ApiStyle.TRPC
    include_comments: bool = True
    strict_mode: bool = True

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class LLMConfig(BaseModel):
    """LLM configuration for Bedrock Claude"""
    provider: LLMProvider = LLMProvider.BEDROCK_CLAUDE
    model_id: str = "anthropic.claude-3-5-haiku-20241022-v1:0"
    aws_region: str = "us-east-1"
    aws_access_key_id: Optional[SecretStr] = None
    aws_secret_access_key: Optional[SecretStr] = None
    aws_session_token: Optional[SecretStr] = None
    max_tokens: int = Field(default=8192, ge=100, le=100000)
    parse_temperature: float = Field(default=0.1, ge=0.0, le=1.0)
    generation_temperature: float = Field(default=0.2, ge=0.0, le=1.0)
    retry_attempts: int = Field(default=3, ge=1, le=10)
    retry_delay: float = Field(default=1.0, ge=0.1, le=30.0)
    request_timeout: int = Field(default=120, ge=10, le=600)

    model_config = {"use_enum_values": True, "protected_namespaces": ()}


class SystemConfig(BaseModel):
    """Main system configuration"""
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    log_level: LogLevel = LogLevel.INFO
    json_logs: bool = False
    debug_mode: bool = False

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "SystemConfig":
        """Create configuration from environment variables (and a .env file if present)"""
        load_dotenv(env_file)

        generation = GenerationConfig(
            include_comments=_env_flag("SCHEMAFORGE_INCLUDE_COMMENTS", True),
            strict_mode=_env_flag("SCHEMAFORGE_STRICT_MODE", True),
        )

        try:
            llm_config = LLMConfig(
                aws_region=os.getenv("AWS_REGION", "us-east-1"),
                model_id=os.getenv("BEDROCK_MODEL_ID", LLMConfig.model_fields["model_id"].default),
                max_tokens=int(os.getenv("LLM_MAX_TOKENS", "8192")),
            )
            return cls(
                generation=generation,
                llm=llm_config,
                log_level=LogLevel(os.getenv("LOG_LEVEL", "INFO").upper()),
                json_logs=_env_flag("SCHEMAFORGE_JSON_LOGS", False),
                debug_mode=_env_flag("DEBUG_MODE", False),
            )
        except (ValueError, PydanticValidationError) as e:
            raise ConfigurationError(
                f"Invalid environment configuration: {e}",
                original_error=e,
            )

    model_config = {"use_enum_values": True}


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_generation_config(path: Union[str, Path]) -> GenerationConfig:
    """Load a GenerationConfig from a YAML or JSON file"""
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
        return GenerationConfig.model_validate(data or {})
    except (OSError, ValueError, yaml.YAMLError, PydanticValidationError) as e:
        raise ConfigurationError(
            f"Could not load generation config from {path}",
            config_key=str(path),
            original_error=e,
        )


# Global configuration instance
_config: Optional[SystemConfig] = None


def get_config() -> SystemConfig:
    """Get the global configuration instance"""
    global _config
    if _config is None:
        _config = SystemConfig.from_env()
    return _config


def set_config(config: SystemConfig) -> None:
    """Set the global configuration instance"""
    global _config
    _config = config


def reset_config() -> None:
    """Reset the global configuration instance"""
    global _config
    _config = None
