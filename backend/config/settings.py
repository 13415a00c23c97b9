import os
from dotenv import load_dotenv
from typing import Dict

# Load environment variables
load_dotenv()

class Settings:
    """Application settings configuration"""

    # Application
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    DEBUG: bool = ENVIRONMENT == "development"

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FILE: str = os.getenv("LOG_FILE", "")

    # Cook time slider (minutes)
    DEFAULT_MAX_COOK_TIME: float = float(os.getenv("DEFAULT_MAX_COOK_TIME", "120"))
    COOK_TIME_MIN: int = int(os.getenv("COOK_TIME_MIN", "5"))
    COOK_TIME_MAX: int = int(os.getenv("COOK_TIME_MAX", "240"))
    COOK_TIME_STEP: int = int(os.getenv("COOK_TIME_STEP", "5"))

    # Servings slider
    DEFAULT_MAX_SERVINGS: float = float(os.getenv("DEFAULT_MAX_SERVINGS", "10"))
    SERVINGS_MIN: int = int(os.getenv("SERVINGS_MIN", "1"))
    SERVINGS_MAX: int = int(os.getenv("SERVINGS_MAX", "10"))

    # Rating slider
    RATING_MIN: float = 0.0
    RATING_MAX: float = 5.0
    RATING_STEP: float = float(os.getenv("RATING_STEP", "0.5"))

    # Free-text input
    MAX_SEARCH_LENGTH: int = int(os.getenv("MAX_SEARCH_LENGTH", "200"))

    # Validation methods
    def validate_filter_ranges(self) -> bool:
        """Check that every slider default sits inside its range"""
        return all([
            self.COOK_TIME_MIN <= self.DEFAULT_MAX_COOK_TIME <= self.COOK_TIME_MAX,
            self.SERVINGS_MIN <= self.DEFAULT_MAX_SERVINGS <= self.SERVINGS_MAX,
            self.RATING_MIN < self.RATING_MAX,
        ])

    def get_filter_defaults(self) -> Dict[str, float]:
        """Get the numeric bounds a freshly reset filter starts from"""
        return {
            "max_cook_time_minutes": self.DEFAULT_MAX_COOK_TIME,
            "min_rating": self.RATING_MIN,
            "max_servings": self.DEFAULT_MAX_SERVINGS,
        }

# Global settings instance
settings = Settings()
