"""Configuration for the FRC match scheduler application."""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

from .constants import CONFIG_FILE_DEFAULT, RANDOM_SEED_RANGE
from .pydantic_schemas import (
    AnnealingModel,
    AppConfigModel,
    CostModelConfig,
    ExportModel,
    LoggingModel,
    ScheduleModel,
)

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def get_rng_seed(seed: int | str | None) -> int:
    """Return the RNG seed as an integer."""
    if isinstance(seed, int):
        return seed

    return int(
        np.random.default_rng().integers(*RANDOM_SEED_RANGE)
        if seed is None
        else int(hashlib.sha256(seed.encode()).hexdigest(), 16) % (RANDOM_SEED_RANGE[1] + 1)
    )


def apply_overrides(model: AppConfigModel, overrides: dict[str, dict[str, Any]]) -> AppConfigModel:
    """Return a validated copy of the model with section values replaced.

    Overrides map a section name to the values to replace in it. None values
    are ignored so that unset command line options keep the file's values.
    """
    data = model.model_dump()
    for section, values in overrides.items():
        data[section].update({k: v for k, v in values.items() if v is not None})
    return AppConfigModel.model_validate(data)


@dataclass(slots=True)
class AppConfig:
    """Configuration for the FRC match scheduler application."""

    schedule: ScheduleModel
    annealing: AnnealingModel
    cost: CostModelConfig
    exports: ExportModel
    logging: LoggingModel
    seed: int
    rng: np.random.Generator

    @classmethod
    def load_model(cls, path: Path | None = None) -> AppConfigModel:
        """Read and validate the configuration file."""
        if path is None:
            path = CONFIG_FILE_DEFAULT.resolve()

        if not path.exists():
            msg = f"Configuration file does not exist at: {path}"
            raise FileNotFoundError(msg)

        config_data = path.read_text(encoding="utf-8")
        return AppConfigModel.model_validate_json(config_data)

    @classmethod
    def build(cls, path: Path | None = None) -> AppConfig:
        """Create and return the application configuration."""
        return cls.build_from_model(cls.load_model(path))

    @classmethod
    def build_from_model(cls, model: AppConfigModel) -> AppConfig:
        """Create and return the application configuration from a Pydantic model."""
        seed = get_rng_seed(model.annealing.rng_seed)
        return AppConfig(
            schedule=model.schedule,
            annealing=model.annealing,
            cost=model.cost,
            exports=model.exports,
            logging=model.logging,
            seed=seed,
            rng=np.random.default_rng(seed),
        )

    def log_creation_info(self) -> None:
        """Log information about the application configuration creation."""
        logger.debug("AppConfig created successfully with seed %d.", self.seed)
        logger.debug("Initialized schedule configuration: %s", self.schedule)
        logger.debug("Initialized annealing parameters: %s", self.annealing)
        logger.debug("Initialized cost model configuration: %s", self.cost)
        logger.debug("Initialized export configuration: %s", self.exports)
