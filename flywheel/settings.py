"""Application settings using pydantic-settings."""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from .severity import Severity


class ApplicationSettings(BaseSettings):
    """Process-level settings that shape how an application boots.

    All settings can be configured via environment variables with the
    FLYWHEEL_ prefix. For example:
    - FLYWHEEL_ERROR_REPORTING=7
    - FLYWHEEL_ERROR_LOG_LEVEL=warning
    - FLYWHEEL_TRANSLATIONS_DIR=/srv/app/translations

    Attributes:
        error_reporting: Severity mask the error interceptor captures.
        error_log_level: Level name used when intercepted errors are logged.
        error_logger: Name of the logger intercepted errors are written to.
        trace_depth: Maximum number of stack frames written per error.
        default_locale: Locale used when the configuration registry has none.
        translations_dir: Directory holding compiled message catalogs.
        translation_domain: Message catalog domain.

    Example:
        >>> settings = ApplicationSettings(error_reporting=Severity.ERROR)
        >>> app = MyApplication(config, ApplicationType.WEB, settings=settings)
    """

    error_reporting: int = Field(default=int(Severity.ALL), ge=0)
    error_log_level: str = "ERROR"
    error_logger: str = "flywheel.errors"
    trace_depth: int = Field(default=8, ge=1)

    # The casing is intentional and kept for compatibility.
    default_locale: str = "en-Us"
    translations_dir: str | None = None
    translation_domain: str = "messages"

    model_config = {"env_prefix": "FLYWHEEL_"}

    @field_validator("error_log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown logging level {value!r}")
        return level
