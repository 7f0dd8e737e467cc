"""Random task set generators for testing and experiments."""

import math
import random
from typing import List, Optional

from rmsched.models import Task, TaskSet


def uunifast(n: int, u_total: float, seed: Optional[int] = None) -> List[float]:
    """Generate task utilizations using the UUniFast algorithm.

    UUniFast generates uniformly distributed task utilizations that sum to
    the target total utilization.

    Reference:
    Bini, E., & Buttazzo, G. C. (2005). Measuring the performance of schedulability tests.
    Real-Time Systems, 30(1-2), 129-154.

    Args:
        n: Number of tasks.
        u_total: Target total utilization.
        seed: Optional random seed for reproducibility.

    Returns:
        List of n utilization values that sum to approximately u_total.

    Raises:
        ValueError: If n <= 0 or u_total < 0.
    """
    if n <= 0:
        raise ValueError("Number of tasks must be positive")
    if u_total < 0:
        raise ValueError("Target utilization must be non-negative")

    rng = random.Random(seed)

    utilizations = []
    sum_u = u_total

    for i in range(1, n):
        next_sum_u = sum_u * (rng.random() ** (1.0 / (n - i)))
        utilizations.append(sum_u - next_sum_u)
        sum_u = next_sum_u

    # Last utilization is whatever remains
    utilizations.append(sum_u)

    return utilizations


def generate_taskset(
    n: int,
    target_utilization: float,
    period_min: int = 10,
    period_max: int = 1000,
    seed: Optional[int] = None
) -> TaskSet:
    """Generate a random integer task set using UUniFast.

    Periods are drawn log-uniformly from [period_min, period_max] and
    rounded to integers; execution times are ``round(u_i * p_i)`` with a
    minimum of 1. Rounding moves each task's utilization by at most
    ``0.5 / period_min``.

    Args:
        n: Number of tasks to generate.
        target_utilization: Target total utilization.
        period_min: Minimum task period (>= 1).
        period_max: Maximum task period.
        seed: Random seed for reproducibility.

    Returns:
        A TaskSet with n tasks named T1..Tn in generation order.

    Raises:
        ValueError: If parameters are invalid.
    """
    if period_min < 1 or period_max < period_min:
        raise ValueError("Invalid period range")

    rng = random.Random(seed)
    utilizations = uunifast(n, target_utilization, seed=seed)

    log_min = math.log(period_min)
    log_max = math.log(period_max)

    tasks = []
    for i, u in enumerate(utilizations):
        period = int(round(math.exp(rng.uniform(log_min, log_max))))
        period = min(max(period, period_min), period_max)
        execution_time = max(1, int(round(u * period)))
        tasks.append(Task(period=period, execution_time=execution_time, name=f"T{i + 1}"))

    return TaskSet(tasks=tasks)
