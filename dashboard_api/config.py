import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from .errors import ConfigurationError


class Settings(BaseModel):
    supabase_url: str
    supabase_key: str
    revalidate_url: Optional[str] = None
    revalidate_token: Optional[str] = None
    log_level: str = "INFO"
    api_host: str = "0.0.0.0"
    api_port: int = 8000


def load_settings() -> Settings:
    """Read settings from the process environment (and a local .env file).

    The store URL and key are required; without them nothing in the
    dashboard can run, so their absence is raised immediately.
    """
    load_dotenv()

    url = os.getenv("SUPABASE_URL")
    key = os.getenv("SUPABASE_KEY") or os.getenv("SUPABASE_SERVICE_ROLE_KEY")
    missing = [name for name, value in (("SUPABASE_URL", url), ("SUPABASE_KEY", key)) if not value]
    if missing:
        raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")

    return Settings(
        supabase_url=url,
        supabase_key=key,
        revalidate_url=os.getenv("REVALIDATE_URL") or None,
        revalidate_token=os.getenv("REVALIDATE_TOKEN") or None,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        api_host=os.getenv("API_HOST", "0.0.0.0"),
        api_port=int(os.getenv("API_PORT", 8000)),
    )
