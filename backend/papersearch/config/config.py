from __future__ import annotations
from typing import Any, Dict, List, Optional
from pathlib import Path

import yaml
from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Annotated
from pydantic import Field
from dotenv import load_dotenv

load_dotenv()


class MeiliConfig(BaseModel):
    url: Annotated[str, Field(default="http://localhost:7700")]
    api_key: Annotated[Optional[str], Field(default=None)]
    index: Annotated[str, Field(default="papers")]
    timeout: Annotated[float, Field(default=10.0, gt=0)]


class RedisConfig(BaseModel):
    """Redis connection used as the response cache. An empty url disables caching."""
    url: Annotated[Optional[str], Field(default="redis://localhost:6379/0")]
    socket_timeout: Annotated[float, Field(default=1.0, gt=0)]


class CacheConfig(BaseModel):
    ttl_seconds: Annotated[int, Field(default=300, ge=1)]
    namespace: Annotated[str, Field(default="papersearch:search:v1")]


class SearchConfig(BaseModel):
    default_limit: Annotated[int, Field(default=20, ge=0)]
    main_timeout: Annotated[float, Field(default=5.0, gt=0)]
    facet_timeout: Annotated[float, Field(default=3.0, gt=0)]


class ServerConfig(BaseModel):
    host: Annotated[str, Field(default="0.0.0.0")]
    port: Annotated[int, Field(default=8080)]
    cors_origins: Annotated[List[str], Field(default=["*"])]
    log_level: Annotated[str, Field(default="info")]


class Settings(BaseSettings):
    meili: MeiliConfig = Field(default_factory=MeiliConfig)
    redis: RedisConfig = Field(default_factory=RedisConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        def yaml_settings() -> Dict[str, Any]:
            path = Path("settings.yaml")
            if not path.exists():
                return {}
            return yaml.safe_load(path.read_text(encoding="utf-8")) or {}

        return (
            init_settings,
            env_settings,
            dotenv_settings,
            yaml_settings,
            file_secret_settings,
        )


Config = Settings()
