"""Schedulability vs Utilisation Experiment.

Generates random integer task sets at various utilisation levels using
UUniFast, runs both the Liu & Layland test and the exact RTA on each, and
plots the acceptance ratio of each test as a function of utilisation.
"""

from pathlib import Path
from typing import Any, Dict

import yaml

try:
    import matplotlib
    matplotlib.use('Agg')  # Non-interactive backend
    import matplotlib.pyplot as plt
    MATPLOTLIB_AVAILABLE = True
except ImportError:
    MATPLOTLIB_AVAILABLE = False

from rmsched.analysis import analyze_taskset
from rmsched.generators import generate_taskset
from rmsched.logger import configure_logger

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


def load_config(path=DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """Load the YAML experiment configuration."""
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def run_schedulability_experiment(
    utilisation_points: list,
    num_task_sets_per_point: int = 100,
    num_tasks: int = 5,
    min_period: int = 10,
    max_period: int = 1000,
    seed: int = 42,
) -> Dict[float, Dict[str, float]]:
    """Run the acceptance-ratio experiment across utilisation levels.

    Args:
        utilisation_points: Utilisation values to test (e.g. [0.1, ..., 0.9]).
        num_task_sets_per_point: Random task sets generated per utilisation.
        num_tasks: Number of tasks per task set.
        min_period: Minimum task period.
        max_period: Maximum task period.
        seed: Base random seed (varied per task set).

    Returns:
        Dictionary mapping utilisation -> {"rta": ratio, "liu_layland": ratio}.
    """
    results = {}

    for u_total in utilisation_points:
        rta_count = 0
        ll_count = 0

        for i in range(num_task_sets_per_point):
            task_set_seed = seed + int(u_total * 1000) + i
            taskset = generate_taskset(
                n=num_tasks,
                target_utilization=u_total,
                period_min=min_period,
                period_max=max_period,
                seed=task_set_seed,
            )

            report = analyze_taskset(taskset)
            if report.rta_schedulable:
                rta_count += 1
            if report.liu_layland_schedulable:
                ll_count += 1

        results[u_total] = {
            "rta": rta_count / num_task_sets_per_point,
            "liu_layland": ll_count / num_task_sets_per_point,
        }

    return results


def plot_schedulability_vs_utilisation(
    results: Dict[float, Dict[str, float]],
    output_path: str = "results/schedulability_vs_utilisation.png",
) -> None:
    """Plot the acceptance ratio of both tests vs utilisation."""
    if not MATPLOTLIB_AVAILABLE:
        raise ImportError("matplotlib is required for plotting")

    output_dir = Path(output_path).parent
    output_dir.mkdir(parents=True, exist_ok=True)

    utilisations = sorted(results.keys())
    rta_ratios = [results[u]["rta"] for u in utilisations]
    ll_ratios = [results[u]["liu_layland"] for u in utilisations]

    plt.figure(figsize=(10, 6))
    plt.plot(utilisations, rta_ratios, 'bo-', linewidth=2, markersize=8, label='Exact RTA')
    plt.plot(utilisations, ll_ratios, 'rs--', linewidth=2, markersize=8, label='Liu & Layland bound')
    plt.xlabel('Total Utilisation', fontsize=12)
    plt.ylabel('Schedulability Ratio', fontsize=12)
    plt.title('Schedulability vs Utilisation (rate monotonic)', fontsize=14)
    plt.grid(True, alpha=0.3)
    plt.legend()
    plt.xlim(0, 1.0)
    plt.ylim(0, 1.05)

    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close()

    print(f"Plot saved to {output_path}")


def main():
    """Run the full schedulability vs utilisation experiment."""
    configure_logger()
    config = load_config()
    print("Running schedulability vs utilisation experiment...")

    results = run_schedulability_experiment(
        utilisation_points=config.get("utilisation_points", [u / 10.0 for u in range(1, 10)]),
        num_task_sets_per_point=config.get("num_task_sets_per_point", 150),
        num_tasks=config.get("num_tasks", 5),
        min_period=config.get("min_period", 10),
        max_period=config.get("max_period", 1000),
        seed=config.get("seed", 42),
    )

    print("\nResults:")
    for u, ratios in sorted(results.items()):
        print(f"  U = {u:.2f}: RTA {ratios['rta']:.3f}, Liu & Layland {ratios['liu_layland']:.3f}")

    plot_schedulability_vs_utilisation(
        results,
        output_path=config.get("output_path", "results/schedulability_vs_utilisation.png"),
    )

    print("\nExperiment complete!")


if __name__ == "__main__":
    main()
