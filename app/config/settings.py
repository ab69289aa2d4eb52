from typing import Optional

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class OpenAIConfig(BaseSettings):
    """OpenAI-compatible provider configuration."""

    api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_API_KEY", "NEXT_PUBLIC_OPENAI_API_KEY"),
    )
    base_url: Optional[str] = None
    transcription_model: str = "whisper-1"
    completion_model: str = "gpt-4o"
    speech_model: str = "tts-1"
    timeout_seconds: float = Field(default=60.0, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="OPENAI_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_configured(self) -> bool:
        """True when a non-blank API key is available."""
        if self.api_key is None:
            return False
        return bool(self.api_key.get_secret_value().strip())


class SpeechConfig(BaseSettings):
    """Text-to-speech configuration."""

    default_voice: str = "alloy"
    secondary_timeout_seconds: float = Field(default=15.0, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="SPEECH_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


class Settings(BaseSettings):
    """Application settings"""

    app_name: str = "Speaking Quest Backend"
    app_version: str = "1.0.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000
    log_file: str = "logs/app.log"
    pipeline_log_file: str = "logs/practice_pipeline.log"
    transcript_log_file: str = "logs/transcripts.log"

    # Request limits
    max_upload_bytes: int = Field(default=25 * 1024 * 1024, ge=1)
    max_prior_exchanges: int = Field(default=10, ge=0)
    request_timeout_seconds: float = Field(default=90.0, gt=0)

    # Provider
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)

    # Speech synthesis
    speech: SpeechConfig = Field(default_factory=SpeechConfig)

    # CORS
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = Settings()
