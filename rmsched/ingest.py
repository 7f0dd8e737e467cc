"""Task set ingestion from text lines and YAML files.

Text input carries one task per line as ``<period> <execution_time>``;
anything after the second field is ignored. Blank lines are skipped
silently, malformed lines are skipped with a warning, so the analyzer
only ever receives valid tasks.
"""

import re
from pathlib import Path
from typing import Iterable, List, TextIO, Union

import yaml

from rmsched.logger import get_logger
from rmsched.models import Task, TaskSet

LOGGER = get_logger("ingest")
_INTEGER = re.compile(r"-?[0-9]+")


class TaskSetFormatError(ValueError):
    """Raised when a task set document cannot be turned into tasks."""


def _parse_int(text: str) -> int:
    # int() also accepts "+5", "1_000" and non-ASCII digits
    stripped = text.strip()
    if not _INTEGER.fullmatch(stripped):
        raise ValueError(f"not an integer: {text!r}")
    return int(stripped)


def parse_task_line(line: str, lineno: int = 1) -> Task:
    """Parse a single ``<period> <execution_time>`` line into a Task.

    Raises:
        ValueError: If a field is missing, not an integer, or out of range.
    """
    fields = line.split()
    if not fields:
        raise ValueError(f"line {lineno} is empty")
    if len(fields) < 2:
        raise ValueError(f"line {lineno} has no execution time")
    period = _parse_int(fields[0])
    execution_time = _parse_int(fields[1])
    return Task(period=period, execution_time=execution_time)


def parse_task_lines(lines: Iterable[str]) -> List[Task]:
    """Parse task lines, skipping blank and malformed ones.

    Args:
        lines: Text lines, e.g. an open file or ``str.splitlines()``.

    Returns:
        The valid tasks in input order.
    """
    tasks: List[Task] = []
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            tasks.append(parse_task_line(line, lineno))
        except ValueError as exc:
            LOGGER.warning("Skipping line %d (%r): %s", lineno, line.rstrip("\n"), exc)
    return tasks


def read_tasks(stream: TextIO) -> TaskSet:
    """Read a task set from a text stream."""
    return TaskSet(tasks=parse_task_lines(stream))


def _task_from_mapping(entry: object, position: int) -> Task:
    if not isinstance(entry, dict):
        raise TaskSetFormatError(f"Task entry {position} must be a mapping, got {entry!r}")
    missing = [key for key in ("period", "execution_time") if key not in entry]
    if missing:
        raise TaskSetFormatError(f"Task entry {position} is missing {', '.join(missing)}")
    try:
        return Task(
            period=entry["period"],
            execution_time=entry["execution_time"],
            name=str(entry.get("name") or ""),
        )
    except ValueError as exc:
        raise TaskSetFormatError(f"Task entry {position}: {exc}") from exc


def load_taskset(path: Union[str, Path]) -> TaskSet:
    """Load a task set from a YAML file.

    Expected layout::

        tasks:
          - {period: 40, execution_time: 20, name: sensor}
          - {period: 100, execution_time: 25}

    Raises:
        TaskSetFormatError: If the document does not describe a task list
            or any entry is invalid.
    """
    with open(path, "r", encoding="utf-8") as f:
        document = yaml.safe_load(f)

    if document is None:
        return TaskSet()
    if not isinstance(document, dict) or "tasks" not in document:
        raise TaskSetFormatError(f"{path}: expected a mapping with a 'tasks' list")
    entries = document["tasks"] or []
    if not isinstance(entries, list):
        raise TaskSetFormatError(f"{path}: 'tasks' must be a list")

    return TaskSet(tasks=[_task_from_mapping(entry, i + 1) for i, entry in enumerate(entries)])
