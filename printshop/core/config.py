# printshop/core/config.py
import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    # --- API Info ---
    API_TITLE: str = "Print Shop Pricing API"
    API_DESCRIPTION: str = "Itemized price quotes for flyers, cards, leaflets, letterheads, brochures, books and posters, with optional graphic design."
    API_VERSION: str = "1.0.0"

    # --- Server Configuration ---
    PORT: int = int(os.getenv("PORT", "8000"))
    HOST: str = os.getenv("HOST", "0.0.0.0")

    # --- Pricing Configuration Source ---
    # A URL takes precedence over the local file when both are set
    PRICING_CONFIG_PATH: str = os.getenv("PRICING_CONFIG_PATH", "config/pricing_config.yaml")
    PRICING_CONFIG_URL: str = os.getenv("PRICING_CONFIG_URL", "")
    PRICING_CONFIG_TIMEOUT: float = float(os.getenv("PRICING_CONFIG_TIMEOUT", "5"))

    # --- Display ---
    CURRENCY: str = os.getenv("CURRENCY", "DT")

    # --- Logging ---
    LOG_CONFIG: str = os.getenv("LOG_CONFIG", "logging.conf")

    # CORS
    CORS_ORIGINS: list = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
        if origin.strip()
    ]

settings = Settings()
