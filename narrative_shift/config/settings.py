from enum import Enum
from typing import Optional, Tuple, Type, Union
from pathlib import Path

from pydantic import PostgresDsn, ValidationInfo, field_validator, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

# Define the root directory of the narrative_shift service
SERVICE_ROOT_DIR = Path(__file__).parent.parent.resolve()
DEFAULT_CONFIG_PATH = SERVICE_ROOT_DIR / "config" / "app_config.yaml"
# Path to the repository root (two levels up from this settings.py)
PROJECT_ROOT_DIR = SERVICE_ROOT_DIR.parent


class RefundPolicy(str, Enum):
    """What happens to the unused part of a subscription when it is cancelled."""
    NONE = "none"
    PRORATED = "prorated"


class Settings(BaseSettings):
    # Application settings
    APP_NAME: str = "NarrativeShiftService"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8002

    # Security settings
    CORS_ORIGINS: Union[str, list[str]] = "http://localhost:3000,http://localhost:8080"

    # Database settings
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "user"
    DB_PASSWORD: str = "password"
    DB_NAME: str = "narrative_shift_db"
    DATABASE_URL: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("DATABASE_URL", mode='before')
    @classmethod
    def assemble_db_connection(cls, v: Optional[str], values: ValidationInfo) -> str:
        if isinstance(v, str):
            return v
        return str(PostgresDsn.build(
            scheme="postgresql+asyncpg",
            username=values.data.get("DB_USER"),
            password=values.data.get("DB_PASSWORD"),
            host=values.data.get("DB_HOST"),
            port=values.data.get("DB_PORT"),
            path=values.data.get("DB_NAME") or "",
        ))

    # Deployment identity of the program; reported, never used for logic
    PROGRAM_ID: str = "NarrShift1111111111111111111111111111111111"

    # Subscription payments
    TREASURY_IDENTITY: str = "7265617375727900000000000000000000000000000000000000000000000000"
    TIER_A_PRICE: int = Field(default=100_000_000, ge=0)  # 0.1 native coin
    TIER_B_PRICE: int = Field(default=300_000_000, ge=0)  # 0.3 native coin
    TIER_BOUNDARY_DAYS: int = Field(default=30, ge=1)
    CANCELLATION_REFUND_POLICY: RefundPolicy = RefundPolicy.NONE

    # Lets /ledger/airdrop mint native units, for devnet-style deployments only
    LEDGER_AIRDROP_ENABLED: bool = False

    # Logging configuration path (can be overridden by env var)
    LOGGING_CONFIG_PATH: str = str(SERVICE_ROOT_DIR / "config" / "logging_config.yaml")

    def model_post_init(self, __context) -> None:
        """Parse comma-separated strings into lists after model initialization."""
        if isinstance(self.CORS_ORIGINS, str):
            self.CORS_ORIGINS = [origin.strip() for origin in self.CORS_ORIGINS.split(',') if origin.strip()]

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT_DIR / ".env"),  # Load variables from project root .env
        env_file_encoding='utf-8',
        yaml_file=str(DEFAULT_CONFIG_PATH),
        extra='ignore'  # Ignore extra fields from env or yaml
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        # app_config.yaml holds the shipped defaults; env and .env override it
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


# Instantiate settings
settings = Settings()
