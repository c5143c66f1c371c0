"""
Environment configuration for the delete server.
"""
import os
from typing import NamedTuple, Optional

from dotenv import load_dotenv


class Settings(NamedTuple):
    port: int = 3000
    accounts_json: str = "{}"
    cloud_name: Optional[str] = None
    api_key: Optional[str] = None
    api_secret: Optional[str] = None
    log_level: str = "INFO"


def get_settings() -> Settings:
    load_dotenv()

    return Settings(
        port=int(os.getenv("PORT") or 3000),
        accounts_json=os.getenv("CLOUDINARY_ACCOUNTS_JSON") or "{}",
        # CLOUD_NAME is the older name for the default account
        cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME") or os.getenv("CLOUD_NAME"),
        api_key=os.getenv("CLOUDINARY_API_KEY"),
        api_secret=os.getenv("CLOUDINARY_API_SECRET"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
