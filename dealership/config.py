# dealership/config.py
import os
import logging
from pathlib import Path
from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables
load_dotenv()

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent.parent


class OrderSettings(BaseModel):
    """Knobs of the order lifecycle, handed to OrderService explicitly"""
    max_quantity: int = Field(default=5, ge=1)
    page_size: int = Field(default=10, ge=1)
    payment_success_rate: float = Field(default=0.9, ge=0, le=1)
    payment_processing_delay: float = Field(default=1.0, ge=0)
    payment_reference_prefix: str = "PAY_"
    transaction_prefix: str = "TXN_"
    payment_error_message: str = "Payment processing failed"
    notes_max_length: int = Field(default=500, ge=1)


class AuthSettings(BaseModel):
    """Token signing settings"""
    secret_key: str = Field(min_length=1)
    access_token_ttl: int = 60 * 60
    refresh_token_ttl: int = 7 * 24 * 60 * 60


class Config:
    """Configuration settings for the service"""

    # Storage settings
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "postgres").lower()
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")

    # Server settings
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8080"))
    API_PREFIX: str = os.getenv("API_PREFIX", "/api/v1")

    # Auth settings
    SECRET_KEY: str = os.getenv("SECRET_KEY", "")
    ACCESS_TOKEN_TTL: int = int(os.getenv("ACCESS_TOKEN_TTL", str(60 * 60)))
    REFRESH_TOKEN_TTL: int = int(os.getenv("REFRESH_TOKEN_TTL", str(7 * 24 * 60 * 60)))

    # Order / payment settings
    MAX_ORDER_QUANTITY: int = int(os.getenv("MAX_ORDER_QUANTITY", "5"))
    ORDER_PAGE_SIZE: int = int(os.getenv("ORDER_PAGE_SIZE", "10"))
    PAYMENT_SUCCESS_RATE: float = float(os.getenv("PAYMENT_SUCCESS_RATE", "0.9"))
    PAYMENT_PROCESSING_DELAY: float = float(os.getenv("PAYMENT_PROCESSING_DELAY", "1.0"))
    PAYMENT_REFERENCE_PREFIX: str = os.getenv("PAYMENT_REFERENCE_PREFIX", "PAY_")
    TRANSACTION_PREFIX: str = os.getenv("TRANSACTION_PREFIX", "TXN_")
    NOTES_MAX_LENGTH: int = int(os.getenv("NOTES_MAX_LENGTH", "500"))
    PAYMENT_GATEWAY_URL: str = os.getenv("PAYMENT_GATEWAY_URL", "")

    # Other settings
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Paths
    LOG_DIR = Path(os.getenv("LOG_DIR", str(BASE_DIR / "logs")))

    @classmethod
    def validate(cls):
        """Fail fast on missing settings for the selected backend"""
        if cls.STORAGE_BACKEND not in ("postgres", "memory"):
            raise ValueError(f"Unknown STORAGE_BACKEND: {cls.STORAGE_BACKEND}")
        if cls.STORAGE_BACKEND == "postgres" and not cls.DATABASE_URL:
            raise ValueError("No DATABASE_URL set in environment")
        if not cls.SECRET_KEY:
            raise ValueError("No SECRET_KEY set in environment")

    @classmethod
    def order_settings(cls) -> OrderSettings:
        return OrderSettings(
            max_quantity=cls.MAX_ORDER_QUANTITY,
            page_size=cls.ORDER_PAGE_SIZE,
            payment_success_rate=cls.PAYMENT_SUCCESS_RATE,
            payment_processing_delay=cls.PAYMENT_PROCESSING_DELAY,
            payment_reference_prefix=cls.PAYMENT_REFERENCE_PREFIX,
            transaction_prefix=cls.TRANSACTION_PREFIX,
            notes_max_length=cls.NOTES_MAX_LENGTH,
        )

    @classmethod
    def auth_settings(cls) -> AuthSettings:
        return AuthSettings(
            secret_key=cls.SECRET_KEY,
            access_token_ttl=cls.ACCESS_TOKEN_TTL,
            refresh_token_ttl=cls.REFRESH_TOKEN_TTL,
        )


def setup_logging():
    """Configure logging settings"""
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    Config.LOG_DIR.mkdir(parents=True, exist_ok=True)
    log_file = Config.LOG_DIR / "dealership.log"

    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL, logging.INFO),
        format=log_format,
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler()
        ]
    )
