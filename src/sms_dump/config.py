from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, Field


class Settings(BaseModel):
    # MongoDB connection. Override in Docker / production with MONGO_URI.
    mongo_uri: str = Field(
        default_factory=lambda: os.getenv("MONGO_URI", "mongodb://localhost:27017")
    )
    database_name: str = Field(default_factory=lambda: os.getenv("MONGO_DATABASE", "sms"))
    collection_name: str = Field(
        default_factory=lambda: os.getenv("MONGO_COLLECTION", "sms-dumped")
    )

    # Bound on the initial connection; a slower server is treated as unreachable.
    connect_timeout_seconds: float = Field(
        default_factory=lambda: float(os.getenv("MONGO_CONNECT_TIMEOUT", "10"))
    )

    # --- HTTP server ---
    host: str = Field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = Field(default_factory=lambda: int(os.getenv("PORT", "8081")))

    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())


@lru_cache
def get_settings() -> Settings:
    return Settings()
