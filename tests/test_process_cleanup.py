import unittest
from unittest.mock import Mock, patch

import psutil

from utils import process_cleanup


def _proc(pid, name, kill_error=None):
    proc = Mock()
    proc.info = {"pid": pid, "name": name}
    if kill_error is not None:
        proc.kill.side_effect = kill_error
    return proc


class TestKillStrayDriverProcesses(unittest.TestCase):

    def setUp(self):
        process_cleanup.reset()

    def tearDown(self):
        process_cleanup.reset()

    @patch("utils.process_cleanup.psutil.process_iter")
    def test_kills_only_driver_processes(self, process_iter):
        chrome = _proc(10, "chromedriver")
        edge = _proc(11, "msedgedriver.exe")
        browser = _proc(12, "chrome")
        process_iter.return_value = [chrome, edge, browser]

        killed = process_cleanup.kill_stray_driver_processes()

        self.assertEqual(killed, [10, 11])
        chrome.kill.assert_called_once()
        edge.kill.assert_called_once()
        browser.kill.assert_not_called()

    @patch("utils.process_cleanup.psutil.process_iter")
    def test_runs_once_per_process(self, process_iter):
        process_iter.return_value = [_proc(10, "geckodriver")]

        first = process_cleanup.kill_stray_driver_processes()
        second = process_cleanup.kill_stray_driver_processes()

        self.assertEqual(first, second)
        process_iter.assert_called_once()

    @patch("utils.process_cleanup.psutil.process_iter")
    def test_kill_failures_are_skipped(self, process_iter):
        denied = _proc(10, "chromedriver", psutil.AccessDenied(pid=10))
        gone = _proc(11, "chromedriver", psutil.NoSuchProcess(pid=11))
        ok = _proc(12, "chromedriver")
        process_iter.return_value = [denied, gone, ok]

        killed = process_cleanup.kill_stray_driver_processes()

        self.assertEqual(killed, [12])

    @patch("utils.process_cleanup.psutil.process_iter")
    def test_custom_names(self, process_iter):
        process_iter.return_value = [_proc(10, "chromedriver"), _proc(11, "operadriver")]

        self.assertEqual(process_cleanup.kill_stray_driver_processes(["OperaDriver"]), [11])


if __name__ == "__main__":
    unittest.main()
