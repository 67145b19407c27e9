import threading

from django.test import SimpleTestCase

from tradecheck.risk_engine.concurrency import run_all
from tradecheck.risk_engine.types import CheckFailure


class RunAllTests(SimpleTestCase):
    def test_tasks_run_concurrently_and_results_keep_order(self):
        barrier = threading.Barrier(3, timeout=5)

        def task(value):
            def run():
                barrier.wait()
                return value
            return run

        outcomes = run_all({'c': task(3), 'a': task(1), 'b': task(2)}, max_workers=3)

        self.assertEqual(list(outcomes), ['c', 'a', 'b'])
        self.assertEqual(list(outcomes.values()), [3, 1, 2])

    def test_failure_does_not_cancel_siblings(self):
        finished = threading.Event()

        def slow():
            finished.wait(timeout=1)
            return 'done'

        def broken():
            finished.set()
            raise KeyError('missing list')

        with self.assertLogs('tradecheck.risk_engine.concurrency', level='ERROR'):
            outcomes = run_all({'slow': slow, 'broken': broken}, max_workers=2)

        self.assertEqual(outcomes['slow'], 'done')
        self.assertIsInstance(outcomes['broken'], CheckFailure)
        self.assertEqual(outcomes['broken'].check_name, 'broken')
        self.assertEqual(outcomes['broken'].error_type, 'KeyError')

    def test_empty_task_map(self):
        self.assertEqual(run_all({}), {})
