"""Unified configuration via pydantic-settings."""

from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from powerprompt.exceptions import ConfigError

Shell = Literal["bash", "zsh", "none"]


class LayoutMode(str, Enum):
    SINGLE_LINE = "single_line"
    TWO_LINE = "two_line"


class ComposerOptions(BaseModel):
    """Switches that decide which segments the composer emits and where."""

    model_config = ConfigDict(frozen=True)

    show_user_unconditionally: bool = False
    default_user: str | None = None
    layout_mode: LayoutMode = LayoutMode.SINGLE_LINE
    append_hostname_to_user: bool = False


class StyleOptions(BaseModel):
    """How the renderer writes escape sequences."""

    model_config = ConfigDict(frozen=True)

    color: bool = True
    shell: Shell = "bash"


class PromptConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="POWERPROMPT_",
        env_ignore_empty=True,
        populate_by_name=True,
    )

    # User segment
    default_user: str | None = Field(
        default=None,
        validation_alias=AliasChoices("POWERPROMPT_DEFAULT_USER", "DEFAULT_USER"),
    )
    show_user_unconditionally: bool = False
    append_hostname_to_user: bool = Field(
        default=False,
        validation_alias=AliasChoices("POWERPROMPT_APPEND_HOSTNAME"),
    )

    # Layout
    layout_mode: LayoutMode = LayoutMode.SINGLE_LINE
    two_line: str = Field(default="", validation_alias=AliasChoices("PS1_TWO_LINE"))

    # Rendering
    color: bool = True
    shell: Shell = "bash"

    # Git
    git_timeout_seconds: float = Field(default=2.0, gt=0)

    # Logging
    log_level: str = "WARNING"
    log_console: bool = False
    log_dir: Path | None = None
    log_max_bytes: int = 1_048_576
    log_backup_count: int = 3

    @field_validator("default_user", mode="before")
    @classmethod
    def blank_default_user_is_unset(cls, v: str | None) -> str | None:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level: {v}")
        return level

    @model_validator(mode="after")
    def apply_two_line_flag(self) -> "PromptConfig":
        if self.two_line:
            self.layout_mode = LayoutMode.TWO_LINE
        return self

    def composer_options(self) -> ComposerOptions:
        return ComposerOptions(
            show_user_unconditionally=self.show_user_unconditionally,
            default_user=self.default_user,
            layout_mode=self.layout_mode,
            append_hostname_to_user=self.append_hostname_to_user,
        )

    def style_options(self) -> StyleOptions:
        return StyleOptions(color=self.color, shell=self.shell)


def _field_for_env_key(key: str) -> str | None:
    """Map a validation error location back to a PromptConfig field name."""
    key = key.lower()
    for name, field in PromptConfig.model_fields.items():
        names = {name}
        alias = field.validation_alias
        if isinstance(alias, AliasChoices):
            names.update(str(choice) for choice in alias.choices)
        elif isinstance(alias, str):
            names.add(alias)
        if key in {n.lower() for n in names}:
            return name
    return None


def load_config() -> PromptConfig:
    """Load settings from the environment, raising ConfigError when invalid."""
    try:
        return PromptConfig()
    except ValidationError as e:
        fields = {
            _field_for_env_key(str(err["loc"][0])) for err in e.errors() if err["loc"]
        }
        raise ConfigError(
            str(e), fields=tuple(sorted(f for f in fields if f is not None))
        ) from e


def recover_config(error: ConfigError) -> PromptConfig:
    """Reload settings with the fields named in *error* reset to their defaults."""
    overrides = {
        name: PromptConfig.model_fields[name].get_default(call_default_factory=True)
        for name in error.fields
    }
    if not overrides:
        return PromptConfig.model_construct()
    try:
        return PromptConfig(**overrides)
    except ValidationError:
        # An aliased field can still be read from the environment
        return PromptConfig.model_construct()
