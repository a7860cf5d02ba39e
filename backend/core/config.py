import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    database_url: str = os.getenv(
        "DATABASE_URL",
        "sqlite+aiosqlite:///./food_inventory.db"
    )
    database_echo: bool = os.getenv("DATABASE_ECHO", "False").lower() == "true"

    # Open Food Facts search proxy
    catalog_search_url: str = os.getenv(
        "CATALOG_SEARCH_URL",
        "https://world.openfoodfacts.org/cgi/search.pl"
    )
    catalog_timeout: float = float(os.getenv("CATALOG_TIMEOUT", "10"))

    cors_origins: list[str] = [
        o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
    ]

    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_json: bool = os.getenv("LOG_JSON", "False").lower() == "true"

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "5000"))


settings = Settings()
