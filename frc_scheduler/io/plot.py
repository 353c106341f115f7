"""Methods to create plots."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import matplotlib as mpl

mpl.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

if TYPE_CHECKING:
    from matplotlib.figure import Figure

    from ..annealing.history import CostHistory

logger = logging.getLogger(__name__)
logging.getLogger("matplotlib").setLevel(logging.WARNING)
logging.getLogger("PIL").setLevel(logging.WARNING)

FLOAT_MAX = float(np.finfo(float).max)


def to_plot_value(cost: int) -> float:
    """Return the cost as a float, saturated at the largest finite float."""
    try:
        return min(float(cost), FLOAT_MAX)
    except OverflowError:
        return FLOAT_MAX


def finalize(fig: Figure, save_dir: str | Path, default_name: str) -> Path | None:
    """Save the figure and close it, returning None if it could not be written."""
    path = Path(save_dir)
    if path.is_dir():
        path = path / default_name
    try:
        fig.savefig(path, dpi=150)
        logger.debug("Saved plot: %s", path)
    except OSError:
        logger.exception("Error saving plot to %s", path)
        return None
    finally:
        plt.close(fig)
    return path


@dataclass(slots=True)
class Plot:
    """A class for creating plots of an annealing run."""

    history: CostHistory

    def to_frame(self) -> pd.DataFrame:
        """Return the recorded history as a DataFrame indexed by step."""
        costs = [to_plot_value(cost) for cost in self.history.recorded_costs().tolist()]
        return pd.DataFrame(
            data={
                "Cost": np.array(costs, dtype=float),
                "Temperature": self.history.recorded_temperatures(),
            },
            index=pd.RangeIndex(1, len(costs) + 1, name="Step"),
        )

    def plot_cost(self, title: str, save_dir: str | Path) -> Path | None:
        """Create a figure of the cost (log scale) and temperature at every step.

        Args:
            title: Figure title.
            save_dir: Directory or file path to save the figure to.

        Returns:
            The path of the saved figure, or None if nothing was recorded or
            the figure could not be written.

        """
        history_df = self.to_frame()
        if history_df.empty:
            logger.warning("Cannot plot cost. No annealing steps were recorded.")
            return None

        fig, (ax_cost, ax_temp) = plt.subplots(2, 1, figsize=(12, 7), sharex=True)
        history_df["Cost"].plot(kind="line", ax=ax_cost, linewidth=2.0, logy=True)
        ax_cost.set(title=title, ylabel="Cost")
        history_df["Temperature"].plot(kind="line", ax=ax_temp, linewidth=1.0, color="tab:orange")
        ax_temp.set(xlabel="Step", ylabel="Temperature")
        return finalize(fig, save_dir, "cost_plot.png")
