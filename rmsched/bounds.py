"""Liu & Layland utilization bound for rate-monotonic scheduling.

The test is sufficient but not necessary: a task set whose utilization
stays within ``n * (2^(1/n) - 1)`` is schedulable under rate-monotonic
priorities, while a task set above the bound may still be schedulable
(use the exact response-time analysis to decide).
"""

import math
from typing import Iterable

from rmsched.models import LiuLaylandResult, Task


def liu_layland_limit(n: int) -> float:
    """Return the utilization bound for ``n`` tasks.

    The bound is undefined for ``n = 0``; an empty task set never limits
    utilization, so ``math.inf`` is returned.
    """
    if n < 0:
        raise ValueError(f"Number of tasks must be non-negative, got {n}")
    if n == 0:
        return math.inf
    return n * (2.0 ** (1.0 / n) - 1.0)


def liu_layland_bound(tasks: Iterable[Task]) -> LiuLaylandResult:
    """Compute total utilization and the Liu & Layland bound.

    Pure function: the tasks are not modified and their order is irrelevant.

    Args:
        tasks: The tasks to check (a TaskSet or any iterable of Task).

    Returns:
        LiuLaylandResult with utilization, bound and whether
        ``utilization <= bound``. An empty set reports utilization 0.0,
        an infinite bound and is trivially schedulable.
    """
    task_list = list(tasks)
    utilization = math.fsum(t.execution_time / t.period for t in task_list)
    bound = liu_layland_limit(len(task_list))
    return LiuLaylandResult(
        utilization=utilization,
        bound=bound,
        schedulable=utilization <= bound,
    )
