"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (UNITNORM__SECTION__KEY)
3. Project YAML (<project root>/.unitnorm.yaml)
4. Global YAML (~/.config/unitnorm/config.yaml)
5. Built-in defaults (this file)

Examples:
    UNITNORM__LOGGING__LEVEL=DEBUG
    UNITNORM__PARSER__NAME_STRATEGY=suite_prefix
    UNITNORM__PARSER__ERROR_MATCH=exact
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from unitnorm.report.models import (
    DEFAULT_SKIP_MARKERS,
    ErrorMatch,
    NameStrategy,
    ParseOptions,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        UNITNORM__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every skipped record.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ParserConfig(BaseModel):
    """Runner output compatibility options.

    Env vars:
        UNITNORM__PARSER__NAME_STRATEGY: parenthesis | suite_prefix
        UNITNORM__PARSER__ERROR_MATCH: substring | exact
        UNITNORM__PARSER__PASS_STATUS: Status value meaning "passed"
    """

    name_strategy: NameStrategy = Field(
        default=NameStrategy.PARENTHESIS,
        description="parenthesis drops a trailing data set suffix; "
        "suite_prefix drops '<suite>::'. Use suite_prefix only when every event carries a suite.",
    )
    error_match: ErrorMatch = Field(
        default=ErrorMatch.SUBSTRING,
        description="How skip markers match error messages. "
        "exact misclassifies skips from runners that decorate the marker.",
    )
    skip_markers: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SKIP_MARKERS),
        description="Error messages containing these markers are skips, not breakage.",
    )
    pass_status: str = Field(default="pass", description="Status value meaning the test passed.")

    @field_validator("skip_markers")
    @classmethod
    def validate_skip_markers(cls, v: list[str]) -> list[str]:
        if any(not marker for marker in v):
            raise ValueError("Skip markers must be non-empty strings")
        return v

    def to_options(self) -> ParseOptions:
        return ParseOptions(
            name_strategy=self.name_strategy,
            error_match=self.error_match,
            skip_markers=tuple(self.skip_markers),
            pass_status=self.pass_status,
        )


class UnitNormConfig(BaseModel):
    """Root configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    parser: ParserConfig = Field(default_factory=ParserConfig)
