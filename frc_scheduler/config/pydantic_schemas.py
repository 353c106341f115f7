"""Pydantic models for application configuration."""

import logging

from pydantic import BaseModel, Field, model_validator

from .constants import DEFAULT_MATCHES_PER_TEAM, LOG_FILE_DEFAULT, OUTPUT_DIR_DEFAULT

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ScheduleModel(BaseModel):
    """Configuration for the schedule to build."""

    num_teams: int = Field(default=50, ge=1)
    matches_per_team: int = Field(default=DEFAULT_MATCHES_PER_TEAM, ge=1)
    shuffle: bool = True


class AnnealingModel(BaseModel):
    """Simulated annealing parameters."""

    rng_seed: int | str | None = None
    initial_temperature: float = Field(default=2000.0, gt=0.0)
    max_steps: int = Field(default=10000, ge=0)
    report_interval: int = Field(default=100, ge=1)


class CostModelConfig(BaseModel):
    """Configuration for the cost model."""

    legacy: bool = False


class ExportModel(BaseModel):
    """Configuration for export options."""

    output_dir: str = Field(default=OUTPUT_DIR_DEFAULT, min_length=1)
    schedule_json: bool = True
    schedule_csv: bool = True
    schedule_txt: bool = False
    plot_cost: bool = False


class LoggingModel(BaseModel):
    """Configuration for logging."""

    log_file: str = Field(default=LOG_FILE_DEFAULT, min_length=1)
    loglevel_file: str = "DEBUG"
    loglevel_console: str = "WARNING"

    @model_validator(mode="after")
    def validate(self) -> "LoggingModel":
        """Validate and normalize the log levels."""
        for attr in ("loglevel_file", "loglevel_console"):
            level = getattr(self, attr).upper()
            if level not in LOG_LEVELS:
                msg = f"Invalid {attr}: {level}. Must be one of {list(LOG_LEVELS)}."
                raise ValueError(msg)
            setattr(self, attr, level)
        return self


### AppConfigModel
class AppConfigModel(BaseModel):
    """Root model for the entire application configuration from JSON."""

    schedule: ScheduleModel = Field(default_factory=ScheduleModel)
    annealing: AnnealingModel = Field(default_factory=AnnealingModel)
    cost: CostModelConfig = Field(default_factory=CostModelConfig)
    exports: ExportModel = Field(default_factory=ExportModel)
    logging: LoggingModel = Field(default_factory=LoggingModel)
