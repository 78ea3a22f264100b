"""
Test suites package.

Unit tests for webhelper live in `testsuites/unit`. They run against
in-memory Playwright fakes and never start a real browser.
"""
