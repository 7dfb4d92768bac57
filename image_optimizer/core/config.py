from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Load env from .env file
    model_config = {"env_file": ".env", "extra": "ignore"}

    # Where encoded images are written, named {key}.{format}
    OUTPUT_DIRECTORY: Path = Path(".")
    PORT: int = 8080

    # "*" or comma separated host suffixes
    ALLOWED_DOMAINS: str = "*"

    FETCH_TIMEOUT_SECONDS: float = 10.0
