"""Configuration management for Recipe Finder service.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os
from urllib.parse import quote

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # Gemini: required credential plus the generateContent endpoint it is embedded in
        self.GOOGLE_API_KEY: str = os.getenv("GOOGLE_API_KEY", "")
        self.GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
        self.GEMINI_BASE_URL: str = os.getenv(
            "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta/models"
        )
        # Key is URL-encoded once here, never at call time
        self.GEMINI_URL: str = (
            f"{self.GEMINI_BASE_URL.rstrip('/')}/{self.GEMINI_MODEL}:generateContent"
            f"?key={quote(self.GOOGLE_API_KEY, safe='')}"
        )
        # Upstream LLM timeout in seconds. Default: 30
        self.LLM_TIMEOUT_SECONDS: float = float(os.getenv("LLM_TIMEOUT_SECONDS", "30"))

        # Pexels: optional, an empty key disables the stock-photo tier
        self.PEXELS_API_KEY: str = os.getenv("PEXELS_API_KEY", "")
        self.PEXELS_SEARCH_URL: str = os.getenv("PEXELS_SEARCH_URL", "https://api.pexels.com/v1/search")
        # Stock-photo lookup timeout in seconds. Default: 10
        self.IMAGE_TIMEOUT_SECONDS: float = float(os.getenv("IMAGE_TIMEOUT_SECONDS", "10"))

        # Deterministic fallback image generator
        self.FALLBACK_IMAGE_HOST: str = os.getenv("FALLBACK_IMAGE_HOST", "loremflickr.com")
        self.FALLBACK_IMAGE_WIDTH: int = int(os.getenv("FALLBACK_IMAGE_WIDTH", "640"))
        self.FALLBACK_IMAGE_HEIGHT: int = int(os.getenv("FALLBACK_IMAGE_HEIGHT", "420"))
        # Appended to every image query: "<title> <descriptor> dish"
        self.IMAGE_QUERY_DESCRIPTOR: str = os.getenv("IMAGE_QUERY_DESCRIPTOR", "indian paneer")

        # Maximum number of ideas returned per request. Default: 10
        self.MAX_IDEAS: int = int(os.getenv("MAX_IDEAS", "10"))

        # Server
        self.HOST: str = os.getenv("HOST", "127.0.0.1")
        self.PORT: int = int(os.getenv("PORT", "3000"))
        # Comma-separated list, "*" for development
        self.CORS_ALLOW_ORIGINS: str = os.getenv("CORS_ALLOW_ORIGINS", "*")

    @property
    def cors_origins(self) -> list[str]:
        """Parsed CORS origins list."""
        if not self.CORS_ALLOW_ORIGINS or self.CORS_ALLOW_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ALLOW_ORIGINS.split(",") if o.strip()]

    def validate(self) -> None:
        """Validate required configuration.

        Raises:
            ValueError: If required API keys are missing or invalid values provided.
        """
        if not self.GOOGLE_API_KEY:
            raise ValueError("GOOGLE_API_KEY environment variable is required")
        if not (1 <= self.MAX_IDEAS <= 10):
            raise ValueError(f"MAX_IDEAS must be between 1 and 10, got: {self.MAX_IDEAS}")
        if self.LLM_TIMEOUT_SECONDS <= 0:
            raise ValueError(f"LLM_TIMEOUT_SECONDS must be positive, got: {self.LLM_TIMEOUT_SECONDS}")
        if self.IMAGE_TIMEOUT_SECONDS <= 0:
            raise ValueError(f"IMAGE_TIMEOUT_SECONDS must be positive, got: {self.IMAGE_TIMEOUT_SECONDS}")
        if self.FALLBACK_IMAGE_WIDTH < 1 or self.FALLBACK_IMAGE_HEIGHT < 1:
            raise ValueError(
                f"Fallback image dimensions must be positive, got: "
                f"{self.FALLBACK_IMAGE_WIDTH}x{self.FALLBACK_IMAGE_HEIGHT}"
            )
        if not (1 <= self.PORT <= 65535):
            raise ValueError(f"PORT must be between 1 and 65535, got: {self.PORT}")


# Create module-level config instance; validated by the application factory
config = Config()
