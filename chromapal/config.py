"""
Chromapal Configuration
Manages environment variables and defaults for the palette service.
"""
import os
from typing import Optional


def _optional_int(name: str) -> Optional[int]:
    value = os.environ.get(name)
    return int(value) if value not in (None, "") else None


class Config:
    """Configuration class for Chromapal services."""

    # Upload limits
    MAX_FILE_MB: int = int(os.environ.get("CHROMAPAL_MAX_FILE_MB", "10"))
    MAX_IMAGE_PIXELS: int = int(os.environ.get("CHROMAPAL_MAX_IMAGE_PIXELS", "50000000"))

    # Logging
    LOG_LEVEL: str = os.environ.get("CHROMAPAL_LOG_LEVEL", "INFO")

    # Clustering
    RNG_SEED: Optional[int] = _optional_int("CHROMAPAL_RNG_SEED")
    MAX_ITERATIONS: int = int(os.environ.get("CHROMAPAL_MAX_ITERATIONS", "10"))
    STOP_ON_CONVERGENCE: bool = bool(int(os.environ.get("CHROMAPAL_STOP_ON_CONVERGENCE", "0")))

    # Observability
    METRICS_ENABLED: bool = bool(int(os.environ.get("CHROMAPAL_METRICS_ENABLED", "1")))

    # CORS settings
    ALLOWED_ORIGINS: str = os.environ.get("CHROMAPAL_ALLOWED_ORIGINS", "")

    # Supported image formats
    SUPPORTED_MIME_TYPES = ["image/jpeg", "image/png", "image/webp"]
    SUPPORTED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp"}

    # Variable export formats
    VARIABLE_FORMATS = ("css", "scss")

    @classmethod
    def validate_max_iterations(cls, iterations: int) -> bool:
        """Validate clustering iteration cap."""
        return 1 <= iterations <= 100

    @classmethod
    def validate_variable_format(cls, fmt: str) -> bool:
        """Validate CSS/SCSS export format."""
        return fmt in cls.VARIABLE_FORMATS

    @classmethod
    def allowed_origins(cls) -> list:
        """Parse comma separated CORS origins."""
        return [origin.strip() for origin in cls.ALLOWED_ORIGINS.split(",") if origin.strip()]


# Global config instance
config = Config()
