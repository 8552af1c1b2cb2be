"""Application configuration and settings management."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import __version__
from .errors import CredentialsError


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="BODBRIDGE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )

    app_name: str = "IGT Beverage-on-Demand -> Acres 4 Kai API bridge"
    version: str = __version__
    default_port: int = Field(default=4567, ge=1, le=65535)
    bind_host: str = "0.0.0.0"
    credentials_file: Path = Field(
        default=Path("kai_bod_api_credentials"),
        description="File holding the Kai sitename, username and password, one per line.",
    )
    api_base_url_template: str = Field(
        default="https://{sitename}.kailabor.com/api/v3",
        description="Kai API root; {sitename} is replaced with the configured site.",
    )
    api_timeout_seconds: float = Field(default=30.0, gt=0.0)
    zonefile: Path = Field(
        default=Path(".kai_bod_zonefile"),
        description="Local snapshot of the Kai zone list keyed by location code.",
    )
    zonefile_script: Optional[Path] = Field(
        default=Path("build_zonefile"),
        validation_alias=AliasChoices("zonefile_script", "BODBRIDGE_ZONEFILE_SCRIPT", "ZONEFILE_SCRIPT"),
        description="Executable that prints a fresh zone file; used only when present and executable.",
    )
    zonefile_script_timeout_seconds: float = Field(default=120.0, gt=0.0)
    zonefile_expiration_time: float = Field(
        default=60.0 * 60.0,
        gt=0.0,
        validation_alias=AliasChoices(
            "zonefile_expiration_time",
            "BODBRIDGE_ZONEFILE_EXPIRATION_TIME",
            "ZONEFILE_EXPIRATION_TIME",
        ),
        description="Seconds before the zone file and its in-memory copy are considered stale.",
    )
    log_level: str = "INFO"

    @field_validator("credentials_file", "zonefile", "zonefile_script", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Optional[Path]:
        if value is None or value == "":
            return None
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @property
    def banner(self) -> str:
        return f"{self.app_name} {self.version}"


@dataclass(slots=True, frozen=True)
class ApiCredentials:
    sitename: str
    username: str
    password: str


def load_api_credentials(path: Path | None = None) -> ApiCredentials:
    """Read sitename, username and password from the credentials file (one value per line)."""
    credentials_path = path or settings.credentials_file
    if not credentials_path.exists():
        raise CredentialsError(f"API credentials file not found: {credentials_path}")

    lines = [line.strip() for line in credentials_path.read_text(encoding="utf-8").splitlines()]
    values = (lines + ["", "", ""])[:3]
    for label, value in zip(("sitename", "username", "password"), values):
        if not value:
            raise CredentialsError(f"Must supply {label} in Kai API credentials file")
    sitename, username, password = values
    return ApiCredentials(sitename=sitename, username=username, password=password)


settings = Settings()
