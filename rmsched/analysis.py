"""Response-time analysis for rate-monotonic fixed-priority scheduling.

This module implements the exact iterative response-time analysis (RTA)
for periodic tasks with implicit deadlines on a single processor.

RTA Formula:
    w_i^(k+1) = e_i + sum_{j in hp(i)} ceil(w_i^(k) / p_j) * e_j

where:
    - w_i^(k) is the response time estimate at iteration k
    - e_i is the worst-case execution time of task i
    - hp(i) is the set of tasks with higher priority than task i
    - p_j is the period of task j
    - e_j is the worst-case execution time of task j

The iteration starts with w_i^(0) = e_i and stops when either:
    1. Exceedance: w_i^(k+1) > p_i (checked first, the task set is not schedulable)
    2. Convergence: w_i^(k+1) = w_i^(k)

All quantities are integers; the ceiling uses integer arithmetic only.

Priority assignment is rate monotonic: shorter period = higher priority.
Tasks with equal periods are ranked by input order, the earlier task
having the higher priority (and therefore interfering with the later one).
"""

from typing import Iterable, Iterator, List, Optional, Sequence, Union

from rmsched.bounds import liu_layland_bound
from rmsched.logger import get_logger
from rmsched.models import AnalysisReport, RTAState, Task, TaskResult, TaskSet

LOGGER = get_logger("analysis")

TaskCollection = Union[TaskSet, Iterable[Task]]


def _as_taskset(tasks: TaskCollection) -> TaskSet:
    if isinstance(tasks, TaskSet):
        return tasks
    return TaskSet(tasks=list(tasks))


def ceil_div(a: int, b: int) -> int:
    """Integer ceiling of ``a / b`` for ``a >= 0`` and ``b > 0``."""
    if b <= 0:
        raise ValueError(f"Divisor must be positive, got {b}")
    return (a + b - 1) // b


def assign_priority_order(tasks: Iterable[Task]) -> List[Task]:
    """Return the tasks sorted by ascending period (highest priority first).

    The sort is stable, so tasks with equal periods keep their relative
    input order. The returned list is new; the input is left untouched.
    """
    return sorted(tasks, key=lambda t: t.period)


def interference(window: int, higher_priority_tasks: Iterable[Task]) -> int:
    """Return the preemption demand of higher-priority tasks in ``window``."""
    return sum(
        ceil_div(window, hp_task.period) * hp_task.execution_time
        for hp_task in higher_priority_tasks
    )


class ResponseTimeIteration:
    """Explicit state machine for one task's fixed-point iteration.

    States move INITIAL -> ITERATING on the first interference computation,
    stay ITERATING while the estimate grows without passing the period, and
    end in CONVERGED (estimate unchanged) or EXCEEDED (estimate above the
    period). The estimate strictly increases on every non-terminal step and
    is bounded by the period, so the machine always terminates.
    """

    def __init__(self, task: Task, higher_priority_tasks: Sequence[Task]):
        self.task = task
        self.higher_priority_tasks = list(higher_priority_tasks)
        self.state = RTAState.INITIAL
        self.window = task.execution_time
        self.iterations = 0

    @property
    def done(self) -> bool:
        return self.state in (RTAState.CONVERGED, RTAState.EXCEEDED)

    @property
    def response_time(self) -> Optional[int]:
        """Final worst-case response time once converged, else None."""
        if self.state is RTAState.CONVERGED:
            return self.window
        return None

    def demand(self, window: int) -> int:
        """Return the next estimate for a response window of length ``window``."""
        return self.task.execution_time + interference(window, self.higher_priority_tasks)

    def step(self) -> RTAState:
        """Perform one interference computation and return the new state."""
        if self.done:
            return self.state

        self.state = RTAState.ITERATING
        self.iterations += 1
        new_window = self.demand(self.window)

        if new_window > self.task.period:
            self.window = new_window
            self.state = RTAState.EXCEEDED
            LOGGER.debug(
                "%s exceeds its period %d (w=%d) after %d iterations",
                self.task.name or "task", self.task.period, new_window, self.iterations,
            )
            return self.state

        if new_window == self.window:
            self.state = RTAState.CONVERGED
            LOGGER.debug(
                "%s converged to w=%d in %d iterations",
                self.task.name or "task", new_window, self.iterations,
            )
            return self.state

        if new_window < self.window:
            raise RuntimeError(
                f"Response time decreased from {self.window} to {new_window}; "
                "the fixed-point iteration would not terminate"
            )

        self.window = new_window
        return self.state

    def run(self) -> RTAState:
        """Step until a terminal state is reached."""
        while not self.done:
            self.step()
        return self.state


def iterate_response_time(task: Task, higher_priority_tasks: Sequence[Task]) -> Iterator[int]:
    """Yield every estimate of the fixed-point iteration, starting with e.

    The last value yielded is either the converged response time (repeated
    once, since convergence is detected when an estimate does not change)
    or the first estimate that exceeds the period.
    """
    machine = ResponseTimeIteration(task, higher_priority_tasks)
    yield machine.window
    while not machine.done:
        machine.step()
        yield machine.window


def compute_response_time(task: Task, higher_priority_tasks: Sequence[Task]) -> Optional[int]:
    """Compute the worst-case response time of a task.

    Only ``execution_time`` and ``period`` of the higher-priority tasks are
    used; their own response times are not needed.

    Args:
        task: The task to analyze.
        higher_priority_tasks: All tasks with strictly higher priority.

    Returns:
        The worst-case response time if the iteration converges within the
        period, None if the task is not schedulable.
    """
    machine = ResponseTimeIteration(task, higher_priority_tasks)
    machine.run()
    return machine.response_time


def _analyze(taskset: TaskSet) -> List[TaskResult]:
    ordered = taskset.priority_order()
    results: List[TaskResult] = []
    exceeded = False

    for priority, (index, task) in enumerate(ordered):
        if exceeded:
            results.append(TaskResult(
                index=index,
                priority=priority,
                name=task.name,
                period=task.period,
                execution_time=task.execution_time,
                response_time=None,
                state=RTAState.INITIAL,
            ))
            continue

        hp_tasks = [t for _, t in ordered[:priority]]
        machine = ResponseTimeIteration(task, hp_tasks)
        state = machine.run()
        results.append(TaskResult(
            index=index,
            priority=priority,
            name=task.name,
            period=task.period,
            execution_time=task.execution_time,
            response_time=machine.response_time,
            state=state,
            iterations=machine.iterations,
        ))
        if state is RTAState.EXCEEDED:
            # Later tasks cannot rescue the verdict; stop here
            exceeded = True

    return results


def is_schedulable(tasks: TaskCollection) -> bool:
    """Return True if every task converges within its period.

    Tasks are analyzed in rate-monotonic priority order and the analysis
    stops at the first task whose response time exceeds its period.
    """
    results = _analyze(_as_taskset(tasks))
    return all(r.state is RTAState.CONVERGED for r in results)


def analyze_taskset(tasks: TaskCollection) -> AnalysisReport:
    """Run both the Liu & Layland test and the exact RTA on a task set.

    Args:
        tasks: A TaskSet or any iterable of Task in input order.

    Returns:
        An AnalysisReport with per-task results in priority order and the
        verdicts of both tests. An empty task set is schedulable.
    """
    taskset = _as_taskset(tasks)
    results = _analyze(taskset)
    ll = liu_layland_bound(taskset)
    rta_schedulable = all(r.state is RTAState.CONVERGED for r in results)

    LOGGER.info(
        "Analyzed %d tasks: U=%.4f, bound=%.4f, RTA %s",
        len(taskset), ll.utilization, ll.bound,
        "schedulable" if rta_schedulable else "not schedulable",
    )
    return AnalysisReport(
        results=tuple(results),
        utilization=ll.utilization,
        bound=ll.bound,
        liu_layland_schedulable=ll.schedulable,
        rta_schedulable=rta_schedulable,
    )
