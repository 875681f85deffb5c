from __future__ import annotations

from pathlib import Path

from loguru import logger
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from vehicle_evolver.evolution.engine.metrics import GenerationStatistics  # noqa: E402


def plot_statistics(
    stats: list[GenerationStatistics],
    output_path: str | Path,
    finish_line: float | None = 14_900,
) -> Path:
    """Write an average/max fitness per generation chart to ``output_path``."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    generations = list(range(len(stats)))
    fig, ax = plt.subplots(figsize=(12, 3))
    try:
        ax.plot(generations, [s.avg_fitness for s in stats], label="Average fitness")
        ax.plot(generations, [s.max_fitness for s in stats], label="Max fitness")
        ax.set_xlim(0, max(60, len(stats)))
        if finish_line is not None:
            ax.set_ylim(0, finish_line)
        ax.set_xlabel("Generation")
        ax.set_ylabel("Fitness")
        ax.grid(True, alpha=0.3)
        ax.legend()
        fig.tight_layout()
        fig.savefig(output_path)
    finally:
        plt.close(fig)

    logger.info("[plot_statistics] wrote {} generation(s) to {}", len(stats), output_path)
    return output_path
