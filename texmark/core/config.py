"""
Renderer configuration.

Centralized configuration management with environment variables.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """Renderer settings"""

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"  # json or text
    LOG_FILE: Optional[str] = None

    # Fallback shown when \includegraphics references an unknown resource
    NOT_FOUND_IMAGE_URL: str = (
        "https://c4.wallpaperflare.com/wallpaper/839/927/713/"
        "404-fon-error-404-not-found-wallpaper-thumb.jpg"
    )
    NOT_FOUND_IMAGE_ALT: str = (
        "An image with the text '404 not found' in faded black in front of a white background. "
        "The '404' portion of the text is larger than the rest. It lies on the line above the rest "
        "of the text with the entire number enveloped by black flames. A white-red shine is visible "
        "on the center-left portion of the '0' in '404'. A watermark for 'FeRRoR' appears in small "
        "font on the bottom-right part of the picture."
    )

    # \pic macro
    PIC_DEFAULT_MAX_HEIGHT: int = 300
    PIC_ERROR_TEXT: str = "Image could not be loaded"

    class Config:
        env_prefix = "TEXMARK_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()

