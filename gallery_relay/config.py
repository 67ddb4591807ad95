import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class RelaySettings:
    port: int
    log_level: str
    cloudinary_cloud_name: str
    cloudinary_api_key: str
    cloudinary_api_secret: str
    cloudinary_api_base: str
    search_timeout: float
    cache_ttl: float
    gmail_user: str
    gmail_app_password: str
    smtp_host: str
    smtp_port: int
    smtp_timeout: float
    booking_recipient: str
    sender_name: str
    cors_origins: str

    @classmethod
    def from_env(cls) -> "RelaySettings":
        return cls(
            port=int(os.getenv("PORT", "3000")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            cloudinary_cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME", ""),
            cloudinary_api_key=os.getenv("CLOUDINARY_API_KEY", ""),
            cloudinary_api_secret=os.getenv("CLOUDINARY_API_SECRET", ""),
            cloudinary_api_base=os.getenv(
                "CLOUDINARY_API_BASE", "https://api.cloudinary.com/v1_1"
            ),
            search_timeout=float(os.getenv("SEARCH_TIMEOUT", "10.0")),
            cache_ttl=float(os.getenv("IMAGE_CACHE_TTL", "300")),
            gmail_user=os.getenv("GMAIL_USER", ""),
            gmail_app_password=os.getenv("GMAIL_APP_PASSWORD", ""),
            smtp_host=os.getenv("SMTP_HOST", "smtp.gmail.com"),
            smtp_port=int(os.getenv("SMTP_PORT", "465")),
            smtp_timeout=float(os.getenv("SMTP_TIMEOUT", "30.0")),
            booking_recipient=os.getenv("BOOKING_RECIPIENT", "info@shaszstudios.nl"),
            sender_name=os.getenv("SENDER_NAME", "Shameem Photography"),
            cors_origins=os.getenv("CORS_ORIGINS", "*"),
        )


load_dotenv()
SETTINGS = RelaySettings.from_env()


def configure_logging() -> logging.Logger:
    logging.basicConfig(level=SETTINGS.log_level)
    return logging.getLogger("gallery-relay")
