import time
import unittest

from utils.exceptions import WaitTimeoutError
from utils.waiting import WaitResult, wait_until


class TestWaitUntil(unittest.TestCase):
    """wait_until 轮询原语"""

    def test_returns_success_on_first_true(self):
        result = wait_until(lambda: True, timeout_ms=100, poll_ms=10)

        self.assertIsInstance(result, WaitResult)
        self.assertTrue(result)
        self.assertTrue(result.succeeded)
        self.assertFalse(result.timed_out)
        self.assertEqual(result.attempts, 1)

    def test_keeps_polling_until_predicate_holds(self):
        calls = []

        def predicate():
            calls.append(1)
            return len(calls) >= 3

        result = wait_until(predicate, timeout_ms=2000, poll_ms=5)

        self.assertTrue(result)
        self.assertEqual(result.attempts, 3)

    def test_predicate_errors_count_as_not_yet(self):
        calls = []

        def predicate():
            calls.append(1)
            if len(calls) < 3:
                raise RuntimeError("stale element")
            return True

        result = wait_until(predicate, timeout_ms=2000, poll_ms=5)

        self.assertTrue(result)
        self.assertIsNone(result.last_error)

    def test_timeout_is_reported_not_raised_by_default(self):
        start = time.monotonic()
        result = wait_until(lambda: False, timeout_ms=60, poll_ms=10, description="never")
        elapsed = (time.monotonic() - start) * 1000

        self.assertFalse(result)
        self.assertTrue(result.timed_out)
        self.assertGreaterEqual(elapsed, 55)
        self.assertGreater(result.attempts, 1)
        self.assertIn("never timed out", result.summary())

    def test_timeout_keeps_last_error(self):
        def predicate():
            raise ValueError("boom")

        result = wait_until(predicate, timeout_ms=30, poll_ms=10)

        self.assertFalse(result)
        self.assertIsInstance(result.last_error, ValueError)
        self.assertIn("boom", result.summary())

    def test_raise_on_timeout(self):
        with self.assertRaises(WaitTimeoutError) as ctx:
            wait_until(lambda: False, timeout_ms=20, poll_ms=5, description="theme flip", raise_on_timeout=True)

        self.assertFalse(ctx.exception.result.succeeded)
        self.assertIn("theme flip", str(ctx.exception))

    def test_zero_timeout_still_evaluates_once(self):
        calls = []
        result = wait_until(lambda: calls.append(1), timeout_ms=0, poll_ms=10)

        self.assertFalse(result)
        self.assertEqual(len(calls), 1)

    def test_custom_sleep_receives_milliseconds(self):
        pauses = []

        def sleep(ms):
            pauses.append(ms)
            time.sleep(ms / 1000)

        wait_until(lambda: False, timeout_ms=50, poll_ms=10, sleep=sleep)

        self.assertTrue(pauses)
        self.assertTrue(all(0 < ms <= 10 for ms in pauses))

    def test_rejects_bad_arguments(self):
        with self.assertRaises(ValueError):
            wait_until(lambda: True, timeout_ms=-1)
        with self.assertRaises(ValueError):
            wait_until(lambda: True, poll_ms=0)


if __name__ == "__main__":
    unittest.main()
