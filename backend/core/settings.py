from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Load .env from repository root before reading env vars
load_dotenv()

from pydantic_settings import BaseSettings, SettingsConfigDict

# Paths
BACKEND_DIR: Path = Path(__file__).resolve().parent.parent
REPO_ROOT: Path = BACKEND_DIR.parent
PUBLIC_DIR: Path = REPO_ROOT / "public"


class Settings(BaseSettings):
    """Central application configuration loaded from environment variables (.env)."""

    port: int = 8080
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]
    public_dir: Path = PUBLIC_DIR

    azure_storage_connection_string: Optional[str] = None
    azure_storage_container_name: str = "aiva-files"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
