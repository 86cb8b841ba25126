"""Logging configuration models."""

from pydantic import BaseModel, Field


class LoggingConfig(BaseModel):
    """Configuration for logging behavior."""

    debug: bool = Field(
        default=False,
        description="Log every discovered module and test at debug level",
    )

    suppress_modules: list[str] = Field(
        default_factory=list,
        description="Third-party loggers held at WARNING unless in verbose mode",
    )
