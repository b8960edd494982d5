"""
Test suites package.

Keeps `testsuites` importable so the UI framework, page objects and the
unit tests can share one import path:
  - testsuites.ui_testing.framework: locator resolution, browser, scenario runs
  - testsuites.ui_testing.pages: practice form page object and test data
"""
