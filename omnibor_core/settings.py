"""Configuration settings for OmniBOR document generation.

Settings are loaded from environment variables with .env file support via
pydantic-settings. Every variable carries the ``OMNIBOR_`` prefix.

Environment variables:
    OMNIBOR_DIR: Result directory that receives the ``objects/`` tree
    OMNIBOR_ENABLED: Enable document generation for new build sessions
    OMNIBOR_DEPENDENCY_FILE: Make-style dependency rule file to write
    OMNIBOR_ALGORITHMS: JSON list of gitoid families, e.g. ``["sha1"]``
    OMNIBOR_LOG_LEVEL: Level of the ``omnibor_core`` loggers (default INFO)
    OMNIBOR_LOGGING_CONFIG: YAML ``dictConfig`` file replacing the default logging setup

Example:
    >>> from omnibor_core.settings import settings
    >>> print(settings.result_dir)

Note:
    Settings are loaded once at module import and frozen. There is no
    built-in reload mechanism; construct a new ``Settings()`` to pick up
    changes to the environment.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from omnibor_core.gitoid._types import HashAlgorithm

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """Configuration for OmniBOR build sessions.

    Attributes:
        result_dir: Directory under which ``objects/gitoid_blob_*`` is created
                    (``OMNIBOR_DIR``). Empty means no default; callers must
                    pass one explicitly.

        enabled: Turn on dependency tracking for document generation
                 even when no dependency file is requested.

        dependency_file: Target path for the Make-style dependency listing.
                         Setting it also turns on dependency tracking.

        algorithms: Gitoid families written by default, in order.

        log_level: Level applied to the library's loggers.

        logging_config: Path to a YAML logging configuration. Empty means the
                        built-in stderr configuration.
    """

    model_config = SettingsConfigDict(
        env_prefix="OMNIBOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
        frozen=True,
    )

    result_dir: str = Field(default="", validation_alias="OMNIBOR_DIR")
    enabled: bool = False
    dependency_file: str = ""
    algorithms: tuple[HashAlgorithm, ...] = (HashAlgorithm.SHA1, HashAlgorithm.SHA256)
    log_level: str = "INFO"
    logging_config: str = ""

    @field_validator("algorithms", mode="before")
    @classmethod
    def parse_algorithms(cls, v: object) -> object:
        """Accept names in any case and digest sizes, e.g. ``["SHA1", 32]``."""
        if isinstance(v, (list, tuple)):
            return tuple(HashAlgorithm.parse(item) for item in v)
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        if isinstance(v, str):
            level = v.strip().upper()
            if level not in LOG_LEVELS:
                raise ValueError(f"Unknown log level '{v}', expected one of {', '.join(LOG_LEVELS)}")
            return level
        return v


settings = Settings()
"""Global settings instance, created at import."""
