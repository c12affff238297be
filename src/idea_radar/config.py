"""Zentrale Konfiguration via Pydantic Settings."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings, loaded from environment / .env file."""

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    log_level: str = "INFO"

    # Datenbank-Pfad (relativ zum Working Directory)
    store_db_path: str = "data/idea_radar.db"

    # Gemini
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"

    # Timeouts in ms, TTL in s
    research_timeout: int = 60000
    research_cache_ttl: int = 86400
    generation_timeout: int = 120000
    retry_base_delay_ms: int = 1000

    # Sprache fuer nutzerseitige Texte der Agent-Config
    agent_language: str = "en"

    # Google Trends
    trends_region: str = "KR"
    trends_max_topics: int = 20
    trends_collection_interval: int = 3600

    # Bearer-Token fuer Cron/Admin-Endpoints (leer = keine Pruefung)
    cron_secret: str = ""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def gemini_configured(self) -> bool:
        return bool(self.gemini_api_key)
