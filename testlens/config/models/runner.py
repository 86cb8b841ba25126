"""Test runner configuration models."""

from pydantic import BaseModel, Field, field_validator


class RunnerConfig(BaseModel):
    """Configuration for the browser test runner that filtered runs open."""

    base_url: str = Field(
        default="http://localhost:4200/tests",
        description="Base URL of the test runner page",
    )

    hide_passed: bool = Field(
        default=True,
        description="Ask the runner to hide passed tests",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an absolute http(s) URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("?")
