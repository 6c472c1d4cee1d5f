from __future__ import annotations

import unittest

from sanehtml import HTTPS_URL_REWRITES, replace_https_urls


class TestReplaceHttpsUrls(unittest.TestCase):
    def test_cdn_urls_become_protocol_relative(self) -> None:
        assert replace_https_urls("http://cdn.prtl.eu/a.png") == "//cdn.prtl.eu/a.png"
        assert replace_https_urls("http://cdn2.prtl.eu/a.png") == "//cdn2.prtl.eu/a.png"
        assert replace_https_urls("http://studyportals-cdn2.imgix.net/a") == "//studyportals-cdn2.imgix.net/a"

    def test_portals_become_https(self) -> None:
        value = "see http://www.admissiontestportal.com and http://www.preparationcoursesportal.com/x"
        assert replace_https_urls(value) == (
            "see https://www.admissiontestportal.com and https://www.preparationcoursesportal.com/x"
        )

    def test_match_ignores_case(self) -> None:
        assert replace_https_urls("HTTP://CDN.PRTL.EU/a.png") == "//cdn.prtl.eu/a.png"

    def test_other_urls_are_untouched(self) -> None:
        assert replace_https_urls("http://example.com") == "http://example.com"

    def test_custom_table(self) -> None:
        rewrites = [("http://a.test", r"https://b.test\1"), ("", "ignored")]
        assert replace_https_urls("http://a.test/x", rewrites) == r"https://b.test\1/x"
        assert replace_https_urls("http://cdn.prtl.eu", ()) == "http://cdn.prtl.eu"

    def test_default_table_is_immutable(self) -> None:
        assert isinstance(HTTPS_URL_REWRITES, tuple)


if __name__ == "__main__":
    unittest.main()
