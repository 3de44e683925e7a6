from pydantic_settings import BaseSettings
from dotenv import load_dotenv, find_dotenv
from os import getenv
from typing import Optional

_env_path = find_dotenv(usecwd=True)  # locate a .env file in this folder or parent folders
if _env_path:
    load_dotenv(_env_path)


DEFAULT_MODEL_ID = "gemini-1.5-flash-001"


class Settings(BaseSettings):
    # Target project / region
    VERTEX_PROJECT_ID: Optional[str] = getenv('VERTEX_PROJECT_ID')
    VERTEX_LOCATION: str = getenv('VERTEX_LOCATION', 'us-central1')

    # Bearer token, obtained elsewhere (e.g. `gcloud auth print-access-token`)
    VERTEX_ACCESS_TOKEN: Optional[str] = getenv('VERTEX_ACCESS_TOKEN')

    # Endpoint related
    VERTEX_MODEL_ID: str = getenv('VERTEX_MODEL_ID', DEFAULT_MODEL_ID)
    VERTEX_API_HOST: str = getenv('VERTEX_API_HOST', 'googleapis.com')

    # None keeps httpx's own default timeout
    VERTEX_HTTP_TIMEOUT: Optional[float] = None

    # Logging
    VERTEX_LOG_LEVEL: str = getenv('VERTEX_LOG_LEVEL', 'DEBUG')


settings = Settings()
