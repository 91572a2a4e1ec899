# backend configuration
# loads env vars for the report storage slot, cors and dashboard limits

import os
from pathlib import Path
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# load .env from project root
load_dotenv(Path(__file__).parent.parent / ".env")


class Settings(BaseSettings):
    # storage slot: "file" keeps everything in DATA_DIR, "mongo" uses a mongodb collection
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "file")
    STORAGE_KEY: str = os.getenv("STORAGE_KEY", "healthwatch_reports_v1")
    DATA_DIR: Path = Path(os.getenv("DATA_DIR", "data"))

    # mongodb (only read when STORAGE_BACKEND=mongo)
    MONGODB_URI: str = os.getenv("MONGODB_URI", "")
    MONGODB_DATABASE: str = os.getenv("MONGODB_DATABASE", "healthwatch_db")
    MONGODB_COLLECTION: str = os.getenv("MONGODB_COLLECTION", "key_value")

    # cors
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:5173")

    # dashboard
    RECENT_REPORTS_LIMIT: int = 6

    # report submission validation
    NOTES_MAX_LENGTH: int = 2000

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
