import unittest
from unittest.mock import Mock, patch

import pytest
from playwright.sync_api import Error as PlaywrightError

import conftest
from config.manager import BrowserConfig


class TestLaunchBrowser(unittest.TestCase):

    def setUp(self):
        self.playwright = Mock()

    def test_chromium_gets_args_and_channel(self):
        cfg = BrowserConfig(type="chromium", headless=True, channel="msedge", args=["--mute-audio"])

        instance = conftest._launch_browser(self.playwright, cfg)

        self.assertIs(instance, self.playwright.chromium.launch.return_value)
        self.playwright.chromium.launch.assert_called_once_with(
            headless=True, channel="msedge", args=["--mute-audio"]
        )

    def test_non_chromium_ignores_chromium_args(self):
        cfg = BrowserConfig(type="firefox", headless=False, args=["--start-maximized"])

        conftest._launch_browser(self.playwright, cfg)

        self.playwright.firefox.launch.assert_called_once_with(headless=False)

    def test_launch_failure_fails_instead_of_skipping(self):
        self.playwright.chromium.launch.side_effect = PlaywrightError("Executable doesn't exist")

        with self.assertRaises(pytest.fail.Exception) as ctx:
            conftest._launch_browser(self.playwright, BrowserConfig())

        self.assertIn("Executable doesn't exist", str(ctx.exception))

    def test_launch_does_not_repeat_driver_cleanup(self):
        with patch.object(conftest, "kill_stray_driver_processes") as kill:
            conftest._launch_browser(self.playwright, BrowserConfig())

        kill.assert_not_called()


if __name__ == "__main__":
    unittest.main()
