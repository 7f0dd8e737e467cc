"""UUniFast-based random tests for the schedulability analysis."""

import random
import unittest

from rmsched.analysis import analyze_taskset, assign_priority_order, iterate_response_time
from rmsched.generators import generate_taskset, uunifast
from rmsched.models import TaskSet


class TestUUniFast(unittest.TestCase):
    """Test UUniFast utilization generation."""

    def test_uunifast_sum(self):
        """Test that UUniFast generates utilizations summing to target."""
        utilizations = uunifast(5, 0.7, seed=42)

        self.assertEqual(len(utilizations), 5)
        self.assertAlmostEqual(sum(utilizations), 0.7, places=6)

    def test_uunifast_all_positive(self):
        """Test that all generated utilizations are non-negative."""
        for u in uunifast(10, 0.8, seed=123):
            self.assertGreaterEqual(u, 0.0)

    def test_uunifast_reproducibility(self):
        """Test that same seed produces same results."""
        self.assertEqual(uunifast(5, 0.6, seed=999), uunifast(5, 0.6, seed=999))

    def test_uunifast_invalid_n(self):
        """Test that invalid n raises ValueError."""
        with self.assertRaises(ValueError):
            uunifast(0, 0.5)
        with self.assertRaises(ValueError):
            uunifast(-1, 0.5)

    def test_uunifast_invalid_utilization(self):
        """Test that negative utilization raises ValueError."""
        with self.assertRaises(ValueError):
            uunifast(5, -0.1)


class TestTaskSetGenerator(unittest.TestCase):
    """Test random integer task set generation."""

    def test_generate_taskset_count(self):
        """Test that correct number of tasks are generated."""
        self.assertEqual(len(generate_taskset(7, 0.6, seed=42)), 7)

    def test_generate_taskset_utilization(self):
        """Rounding moves each task by at most 1/period_min."""
        taskset = generate_taskset(10, 0.75, period_min=100, seed=123)
        self.assertAlmostEqual(taskset.total_utilization, 0.75, delta=10 / 100)

    def test_generate_taskset_periods_in_range(self):
        """Test that generated periods are integers within range."""
        taskset = generate_taskset(5, 0.5, period_min=50, period_max=500, seed=456)

        for task in taskset:
            self.assertIsInstance(task.period, int)
            self.assertGreaterEqual(task.period, 50)
            self.assertLessEqual(task.period, 500)

    def test_generate_taskset_valid_tasks(self):
        """Test that execution times are positive integers."""
        for task in generate_taskset(8, 0.8, seed=789):
            self.assertIsInstance(task.execution_time, int)
            self.assertGreaterEqual(task.execution_time, 1)

    def test_generate_taskset_reproducibility(self):
        """Test that same seed produces same task set."""
        self.assertEqual(generate_taskset(5, 0.6, seed=111), generate_taskset(5, 0.6, seed=111))

    def test_generate_taskset_invalid_periods(self):
        """Test that an invalid period range raises ValueError."""
        with self.assertRaises(ValueError):
            generate_taskset(3, 0.5, period_min=0)
        with self.assertRaises(ValueError):
            generate_taskset(3, 0.5, period_min=100, period_max=10)


class TestRandomSchedulability(unittest.TestCase):
    """Test schedulability analysis on randomly generated task sets."""

    def test_low_utilization_schedulable(self):
        """Below the Liu & Layland bound every task set passes RTA."""
        for i in range(20):
            taskset = generate_taskset(5, 0.4, period_min=100, seed=1000 + i)
            report = analyze_taskset(taskset)
            self.assertTrue(report.liu_layland_schedulable)
            self.assertTrue(report.rta_schedulable)

    def test_high_utilization_some_unschedulable(self):
        """Test that high-utilization task sets may be unschedulable."""
        unschedulable_count = 0
        for i in range(20):
            taskset = generate_taskset(10, 0.95, period_min=100, seed=2000 + i)
            if not analyze_taskset(taskset).rta_schedulable:
                unschedulable_count += 1

        self.assertGreater(unschedulable_count, 0)

    def test_over_utilization_unschedulable(self):
        """Test that task sets with U > 1 are unschedulable."""
        for i in range(10):
            taskset = generate_taskset(5, 1.2, period_min=100, seed=3000 + i)
            self.assertGreater(taskset.total_utilization, 1.0)
            self.assertFalse(analyze_taskset(taskset).rta_schedulable)

    def test_liu_layland_implies_rta(self):
        """The utilization bound is sufficient: it never accepts what RTA rejects."""
        for i in range(50):
            taskset = generate_taskset(4, 0.5 + (i % 10) * 0.05, seed=6000 + i)
            report = analyze_taskset(taskset)
            if report.liu_layland_schedulable:
                self.assertTrue(report.rta_schedulable)

    def test_single_task_response_equals_execution_time(self):
        """Test that a single task's response time equals its execution time."""
        for i in range(10):
            taskset = generate_taskset(1, 0.9, period_min=100, seed=4000 + i)
            report = analyze_taskset(taskset)
            self.assertTrue(report.rta_schedulable)
            self.assertEqual(report.results[0].response_time, taskset[0].execution_time)

    def test_response_times_bounded(self):
        """Test that response times lie between e and p."""
        for i in range(10):
            report = analyze_taskset(generate_taskset(6, 0.7, seed=5000 + i))

            for result in report.results:
                if result.response_time is not None:
                    self.assertGreaterEqual(result.response_time, result.execution_time)
                    self.assertLessEqual(result.response_time, result.period)

    def test_iterates_non_decreasing(self):
        """Test that estimates never decrease on random task sets."""
        for i in range(10):
            tasks = assign_priority_order(generate_taskset(6, 0.85, seed=7000 + i))
            for k, task in enumerate(tasks):
                iterates = list(iterate_response_time(task, tasks[:k]))
                self.assertEqual(iterates, sorted(iterates))

    def test_input_order_invariance(self):
        """Test that shuffling distinct-period task sets keeps response times."""
        checked = 0
        for i in range(30):
            taskset = generate_taskset(6, 0.8, seed=8000 + i)
            if len({t.period for t in taskset}) < len(taskset):
                # Equal periods are ranked by input order, so shuffling may change ranks
                continue
            shuffled = list(taskset)
            random.Random(i).shuffle(shuffled)

            original = analyze_taskset(taskset)
            reordered = analyze_taskset(TaskSet(tasks=shuffled))
            self.assertEqual(original.rta_schedulable, reordered.rta_schedulable)
            self.assertEqual(
                {r.name: r.response_time for r in original.results},
                {r.name: r.response_time for r in reordered.results},
            )
            checked += 1

        self.assertGreater(checked, 0)

    def test_idempotent(self):
        """Test that re-running the analysis gives the same report."""
        for i in range(10):
            taskset = generate_taskset(5, 0.8, seed=9000 + i)
            self.assertEqual(analyze_taskset(taskset), analyze_taskset(taskset))


class TestSchedulabilityExperiment(unittest.TestCase):
    """Test the schedulability vs utilisation experiment."""

    def test_experiment_smoke(self):
        """Run the experiment with a reduced configuration."""
        from experiments.sched_util_plot import load_config, run_schedulability_experiment

        config = load_config()
        self.assertIn("utilisation_points", config)

        utilisation_points = [0.3, 0.7, 0.9]
        results = run_schedulability_experiment(
            utilisation_points=utilisation_points,
            num_task_sets_per_point=10,
            num_tasks=3,
            min_period=10,
            max_period=100,
            seed=12345,
        )

        self.assertEqual(sorted(results), utilisation_points)
        for u, ratios in results.items():
            for key in ("rta", "liu_layland"):
                self.assertGreaterEqual(ratios[key], 0.0, f"Invalid {key} ratio for U={u}")
                self.assertLessEqual(ratios[key], 1.0, f"Invalid {key} ratio for U={u}")
            # The bound is sufficient, so it never accepts more task sets than RTA
            self.assertGreaterEqual(ratios["rta"], ratios["liu_layland"])


if __name__ == "__main__":
    unittest.main()
