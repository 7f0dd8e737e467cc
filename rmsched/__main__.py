"""Read ``<period> <execution_time>`` lines from stdin and print the report.

Exit status is 0 when the task set is schedulable by response-time
analysis and 1 otherwise.
"""

import sys

from rmsched.analysis import analyze_taskset
from rmsched.ingest import read_tasks
from rmsched.report import format_report


def main() -> int:
    taskset = read_tasks(sys.stdin)
    report = analyze_taskset(taskset)
    print(format_report(report))
    return 0 if report.rta_schedulable else 1


if __name__ == "__main__":
    sys.exit(main())
