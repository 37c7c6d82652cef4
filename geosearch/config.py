"""
config.py – Settings đọc từ biến môi trường (.env được load qua python-dotenv).
"""
import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    # Geocoder (Photon)
    GEOCODER_URL = os.getenv("GEOCODER_URL", "https://photon.komoot.io/api")
    GEOCODER_TIMEOUT = float(os.getenv("GEOCODER_TIMEOUT", "10.0"))
    GEOCODER_USER_AGENT = os.getenv("GEOCODER_USER_AGENT", "geosearch/1.0")

    # 0 = không gửi tham số limit
    SEARCH_LIMIT = int(os.getenv("SEARCH_LIMIT", "0"))

    # Session
    START_OFFLINE = os.getenv("START_OFFLINE", "0").lower() in ("1", "true", "yes")
    DEFAULT_SEARCH_MODE = os.getenv("DEFAULT_SEARCH_MODE", "partial")

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
