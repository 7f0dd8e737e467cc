"""rmsched: schedulability analysis for rate-monotonic fixed-priority scheduling.

This package decides whether a set of periodic tasks with implicit
deadlines is schedulable on a single preemptive processor, using the
Liu & Layland utilization bound and exact response-time analysis.
"""

from rmsched.models import AnalysisReport, LiuLaylandResult, RTAState, Task, TaskResult, TaskSet
from rmsched.analysis import (
    ResponseTimeIteration,
    analyze_taskset,
    assign_priority_order,
    compute_response_time,
    is_schedulable,
    iterate_response_time,
)
from rmsched.bounds import liu_layland_bound

__version__ = "0.1.0"
__all__ = [
    "Task",
    "TaskSet",
    "TaskResult",
    "RTAState",
    "LiuLaylandResult",
    "AnalysisReport",
    "ResponseTimeIteration",
    "assign_priority_order",
    "compute_response_time",
    "iterate_response_time",
    "is_schedulable",
    "analyze_taskset",
    "liu_layland_bound",
]
