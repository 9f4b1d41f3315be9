"""Application settings models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kubepick.constants.defaults import (
    AUTO_REFRESH_DEFAULT,
    AUTO_REFRESH_INTERVAL_DEFAULT,
    CACHE_TTL_DEFAULT,
    LOG_BUFFER_MAX_LINES_DEFAULT,
    LOG_FOLLOW_MODE_DEFAULT,
    LOG_LEVEL_DEFAULT,
    LOG_OUTPUT_DEFAULT,
    LOG_TAIL_LINES_DEFAULT,
    NAMESPACE_MODE_DEFAULT,
    NOTIFY_TIMEOUT_DEFAULT,
    TMUX_SPLIT_CMD_DEFAULT,
)
from kubepick.constants.enums import LogOutputMode, NamespaceMode
from kubepick.constants.limits import (
    AUTO_REFRESH_INTERVAL_MIN,
    CACHE_TTL_MIN,
    LOG_BUFFER_MAX_LINES_MIN,
    LOG_TAIL_LINES_MIN,
)


class Settings(BaseModel):
    """Immutable settings snapshot with validation.

    A snapshot is never mutated; ``ConfigManager.setup`` replaces it whole.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, use_enum_values=False)

    # Cache
    cache_ttl: int = Field(default=CACHE_TTL_DEFAULT, ge=CACHE_TTL_MIN)
    auto_refresh: bool = AUTO_REFRESH_DEFAULT
    auto_refresh_interval: int = Field(
        default=AUTO_REFRESH_INTERVAL_DEFAULT, ge=AUTO_REFRESH_INTERVAL_MIN
    )

    # Log output
    log_output: LogOutputMode = LogOutputMode(LOG_OUTPUT_DEFAULT)
    log_follow_mode: bool = LOG_FOLLOW_MODE_DEFAULT
    log_buffer_max_lines: int = Field(
        default=LOG_BUFFER_MAX_LINES_DEFAULT, ge=LOG_BUFFER_MAX_LINES_MIN
    )
    log_tail_lines: int = Field(default=LOG_TAIL_LINES_DEFAULT, ge=LOG_TAIL_LINES_MIN)
    tmux_split_cmd: str = TMUX_SPLIT_CMD_DEFAULT

    # Notifications
    log_level: str = LOG_LEVEL_DEFAULT
    notify_timeout: float = Field(default=NOTIFY_TIMEOUT_DEFAULT, gt=0)

    # Initial namespace scope
    namespace_mode: NamespaceMode = NamespaceMode(NAMESPACE_MODE_DEFAULT)

    @field_validator("namespace_mode")
    @classmethod
    def _reject_specific_mode(cls, value: NamespaceMode) -> NamespaceMode:
        # "specific" needs a selected namespace, which settings do not carry.
        if value == NamespaceMode.SPECIFIC:
            raise ValueError("namespace_mode must be 'current' or 'all'")
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return normalized
