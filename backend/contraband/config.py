"""
Application settings (Pydantic Settings).
"""
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

# .env next to backend/ (parent of contraband/)
_backend_dir = Path(__file__).resolve().parent.parent
_env_path = _backend_dir / ".env"


class Settings(BaseSettings):
    # Directory holding drops.json, prices.json, api_keys.json
    data_dir: Path = _backend_dir / "data"
    # Hardcoded admin credentials (ADMIN_USERNAME / ADMIN_PASSWORD in .env to override)
    admin_username: str = "admin"
    admin_password: str = "quakerfm"
    # Discord webhook for POST /log; empty disables forwarding
    discord_webhook_url: str = ""
    relay_timeout_seconds: float = 5.0
    relay_prefix: str = "QCR Log: "
    # Price random walk: +/- max_pct per elapsed second, elapsed capped, price floored
    price_max_pct: float = 0.03
    price_floor: float = 0.01
    price_max_elapsed_seconds: int = 8
    # Extra CORS origins, comma-separated. "*" keeps the dashboard usable from any host.
    cors_origins: str = "*"

    class Config:
        env_file = _env_path
        extra = "ignore"

    @field_validator("admin_username", "admin_password", "discord_webhook_url", "cors_origins", mode="after")
    @classmethod
    def strip_str(cls, v: str) -> str:
        return (v or "").strip()

    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()] or ["*"]


settings = Settings()
