from pathlib import Path

from pydantic_settings import BaseSettings


class ClientSettings(BaseSettings):
    API_URL: str = "http://localhost:8000"
    REQUEST_TIMEOUT_SECONDS: float = 10.0
    TOKEN_FILE: Path = Path.home() / ".config" / "igreja" / "session.json"

    class Config:
        env_prefix = "IGREJA_"
        env_file = ".env"
        extra = "ignore"
