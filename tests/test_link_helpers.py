import unittest
from unittest.mock import Mock

from utils.exceptions import InvalidLinkError
from utils.link_helpers import assert_external_link, host_allowed, host_of
from utils.link_resolver import LinkResolution, LinkState, NavigationMode

GITHUB = {"github.com", "www.github.com"}


def _resolution(final_url: str) -> LinkResolution:
    return LinkResolution(
        href="https://github.com/ravifel",
        final_url=final_url,
        final_host=host_of(final_url),
        mode=NavigationMode.NEW_CONTEXT,
        state=LinkState.CLEANED_UP,
    )


class TestHostOf(unittest.TestCase):

    def test_lower_cases_host(self):
        self.assertEqual(host_of("https://WWW.LinkedIn.com/in/ravi"), "www.linkedin.com")

    def test_strips_port_and_whitespace(self):
        self.assertEqual(host_of("  http://wa.me:443/5511999999999 "), "wa.me")

    def test_rejects_url_without_host(self):
        for url in ("", "mailto:someone@example.com", "/relative/path"):
            with self.subTest(url=url):
                with self.assertRaises(InvalidLinkError):
                    host_of(url)


class TestHostAllowed(unittest.TestCase):

    def test_exact_match(self):
        self.assertTrue(host_allowed("github.com", GITHUB))

    def test_subdomain_match(self):
        self.assertTrue(host_allowed("gist.github.com", GITHUB))

    def test_lookalike_hosts_rejected(self):
        self.assertFalse(host_allowed("evilgithub.com", GITHUB))
        self.assertFalse(host_allowed("github.com.evil.io", GITHUB))

    def test_case_insensitive(self):
        self.assertTrue(host_allowed("GitHub.com", GITHUB))


class TestAssertExternalLink(unittest.TestCase):

    def test_passes_when_both_hosts_allowed(self):
        resolve = Mock(return_value=_resolution("https://github.com/ravifel"))

        result = assert_external_link("https://github.com/ravifel", GITHUB, resolve)

        resolve.assert_called_once_with("https://github.com/ravifel")
        self.assertEqual(result.final_host, "github.com")

    def test_empty_href_fails_before_navigation(self):
        resolve = Mock()
        with self.assertRaises(AssertionError):
            assert_external_link("", GITHUB, resolve)
        resolve.assert_not_called()

    def test_declared_host_outside_allow_list(self):
        resolve = Mock()
        with self.assertRaises(AssertionError) as ctx:
            assert_external_link("https://gitlab.com/ravifel", GITHUB, resolve)
        self.assertIn("gitlab.com", str(ctx.exception))
        resolve.assert_not_called()

    def test_redirect_to_foreign_host_fails(self):
        resolve = Mock(return_value=_resolution("https://login.example.com/"))
        with self.assertRaises(AssertionError) as ctx:
            assert_external_link("https://github.com/ravifel", GITHUB, resolve)
        self.assertIn("Final host 'login.example.com'", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
