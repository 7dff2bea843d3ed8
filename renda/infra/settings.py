from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    renda_env: str = "dev"

    # --- quote cache ---
    cache_ttl_ms: int = 300000
    cache_max_entries: int = 500

    # --- BrAPI ---
    # optional; without it some tickers/modules may be restricted
    brapi_token: Optional[str] = None
    brapi_base_url: str = "https://brapi.dev/api"
    upstream_timeout_seconds: float = 10.0

    # UI rounding allowance on portfolio weights (percentage points)
    portfolio_weight_tolerance: float = 1.0

    cors_origins: str = "*"
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",  # don't crash on other future vars
    }

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
