"""Data models for tasks, task sets and analysis results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Tuple


def _require_int(value: object, what: str, name: str) -> None:
    # bool is an int subclass but never a valid task parameter
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Task {name}: {what} must be an integer, got {value!r}")


@dataclass(frozen=True)
class Task:
    """Represents a periodic task with an implicit deadline.

    Attributes:
        period: Activation period (p), also the relative deadline.
        execution_time: Worst-case execution time per activation (e).
        name: Optional task identifier.

    An execution time larger than the period is accepted: such a task is
    simply not schedulable, which the analysis reports as an outcome.
    """
    period: int
    execution_time: int
    name: str = ""

    def __post_init__(self) -> None:
        """Validate task parameters."""
        _require_int(self.period, "period", self.name)
        _require_int(self.execution_time, "execution_time", self.name)
        if self.period <= 0:
            raise ValueError(f"Task {self.name}: period must be positive, got {self.period}")
        if self.execution_time < 0:
            raise ValueError(
                f"Task {self.name}: execution_time must be non-negative, got {self.execution_time}"
            )

    @property
    def utilization(self) -> float:
        """Return the utilization of this task (e/p)."""
        return self.execution_time / self.period

    def __str__(self) -> str:
        name_str = f"{self.name}: " if self.name else ""
        return f"Task({name_str}p={self.period}, e={self.execution_time})"


@dataclass
class TaskSet:
    """An ordered collection of tasks in their original input order.

    The input order is never changed. Rate-monotonic priorities are a
    derived view (see ``priority_order``): shorter period means higher
    priority, and tasks with equal periods keep their input order, so the
    earlier task is the higher-priority one.
    """
    tasks: List[Task] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Name unnamed tasks after their 1-based input position."""
        self.tasks = [
            task if task.name else Task(task.period, task.execution_time, name=f"T{i + 1}")
            for i, task in enumerate(self.tasks)
        ]

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[int, int]]) -> "TaskSet":
        """Build a task set from ``(period, execution_time)`` pairs."""
        return cls(tasks=[Task(period=p, execution_time=e) for p, e in pairs])

    def priority_order(self) -> List[Tuple[int, Task]]:
        """Return ``(input_index, task)`` pairs, highest priority first."""
        # sorted() is stable, so equal periods keep input order
        return sorted(enumerate(self.tasks), key=lambda item: item[1].period)

    @property
    def total_utilization(self) -> float:
        """Return the total utilization of all tasks."""
        return sum(t.utilization for t in self.tasks)

    def __len__(self) -> int:
        return len(self.tasks)

    def __iter__(self):
        return iter(self.tasks)

    def __getitem__(self, index: int) -> Task:
        return self.tasks[index]


class RTAState(Enum):
    """States of the per-task response-time fixed-point iteration."""
    INITIAL = "initial"
    ITERATING = "iterating"
    CONVERGED = "converged"
    EXCEEDED = "exceeded"


@dataclass(frozen=True)
class TaskResult:
    """Outcome of the response-time analysis for one task.

    Attributes:
        index: Position of the task in the input order (0-based).
        priority: Rate-monotonic rank (0 = highest priority).
        name: Task identifier.
        period: Task period.
        execution_time: Task execution time.
        response_time: Worst-case response time, or None if the task
            exceeded its period or was not analyzed.
        state: Final state of the fixed-point iteration. INITIAL means the
            analysis stopped at a higher-priority task first.
        iterations: Number of interference computations performed.
    """
    index: int
    priority: int
    name: str
    period: int
    execution_time: int
    response_time: Optional[int]
    state: RTAState
    iterations: int = 0


@dataclass(frozen=True)
class LiuLaylandResult:
    """Utilization test result; ``bound`` is infinite for an empty set."""
    utilization: float
    bound: float
    schedulable: bool


@dataclass(frozen=True)
class AnalysisReport:
    """Combined result of both schedulability tests for a task set."""
    results: Tuple[TaskResult, ...]
    utilization: float
    bound: float
    liu_layland_schedulable: bool
    rta_schedulable: bool

    def by_input_order(self) -> List[TaskResult]:
        """Return the per-task results in the original input order."""
        return sorted(self.results, key=lambda r: r.index)

    def response_times(self) -> List[Optional[int]]:
        """Return response times indexed by input position."""
        return [r.response_time for r in self.by_input_order()]
