"""Custom pytest configuration and reporters for readable conversion test output."""
from __future__ import annotations

import re
import sys
from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Add the source tree to the path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent.resolve() / "src"))

# Import first so the module loggers exist, then keep per-pass lines out of the test output
import unitconv.conversion.converter  # noqa: E402
from unitconv.core.logging import set_level  # noqa: E402

set_level("WARNING")

console = Console()

_AUXILIARY_SELECTOR = "span.unit-auxiliary"


class ConversionTestReporter:
    """Collects conversion assertions and prints a summary table of failures."""

    def __init__(self):
        self.failures: list[tuple[str, str, str, str]] = []
        self.passes = 0
        self.total = 0

    def record_result(self, test_name: str, markup: str, expected: str, actual: str, passed: bool):
        self.total += 1
        if passed:
            self.passes += 1
        else:
            self.failures.append((test_name, markup, expected, actual))

    def print_summary(self):
        if not self.failures:
            console.print(
                Panel.fit(
                    f"[bold green]✨ All {self.total} conversions matched ✨[/bold green]",
                    title="Conversion Results",
                    border_style="green",
                )
            )
            return

        table = Table(title="Conversion Test Failures", show_header=True, header_style="bold magenta")
        table.add_column("Test", style="cyan", no_wrap=False)
        table.add_column("Input", style="yellow")
        table.add_column("Expected", style="green")
        table.add_column("Actual", style="red")

        for test_name, markup, expected, actual in self.failures:
            table.add_row(test_name.split("::")[-1], markup, expected, actual)

        console.print(table)
        console.print(
            Panel.fit(
                f"[bold red]Failed:[/bold red] {len(self.failures)} | [bold green]Passed:[/bold green] {self.passes} | [bold]Total:[/bold] {self.total}",
                title="Summary",
                border_style="red",
            )
        )


reporter = ConversionTestReporter()


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Hook to capture conversion assertions for the reporter."""
    outcome = yield
    report = outcome.get_result()

    if report.when != "call":
        return

    for prop_name, prop_value in item.user_properties:
        if prop_name == "conversion_test":
            reporter.record_result(
                item.nodeid,
                prop_value["input"],
                prop_value["expected"],
                prop_value["actual"],
                report.outcome == "passed",
            )
            return

    # Plain asserts written in the "should convert to" form
    if report.failed and report.longrepr:
        match = re.search(
            r"Input '([^']*)' should convert to '([^']*)', got '([^']*)'", str(report.longrepr)
        )
        if match:
            reporter.record_result(item.nodeid, match.group(1), match.group(2), match.group(3), False)


def pytest_sessionfinish(session, exitstatus):
    """Print the conversion summary at the end of the session."""
    if reporter.total > 0:
        console.print("\n")
        reporter.print_summary()


def auxiliary_texts(soup: BeautifulSoup) -> list[str]:
    """Text of every inserted conversion, in document order."""
    return [span.get_text() for span in soup.select(_AUXILIARY_SELECTOR)]


@pytest.fixture
def default_config():
    """The built-in defaults, independent of any config file on disk."""
    from unitconv.core.config import ConfigLoader

    return ConfigLoader.from_dict()


@pytest.fixture
def make_soup():
    """Parse markup with the stdlib-backed parser every environment has."""

    def _make_soup(markup: str) -> BeautifulSoup:
        return BeautifulSoup(markup, "html.parser")

    return _make_soup


@pytest.fixture
def converted(make_soup, default_config):
    """Parse ``markup``, run one conversion pass over it and return the soup."""
    from unitconv.conversion.converter import convert

    def _converted(markup: str, config=None) -> BeautifulSoup:
        soup = make_soup(markup)
        convert(soup, config=config or default_config)
        return soup

    return _converted


@pytest.fixture
def assert_converts(request, converted):
    """
    Assert that ``markup`` gains exactly the ``expected`` conversions.

    Failures are printed as a rich panel and collected for the session summary.
    """

    def _assert_converts(markup: str, expected: list[str], config=None) -> BeautifulSoup:
        soup = converted(markup, config=config)
        actual = auxiliary_texts(soup)
        expected_text, actual_text = " | ".join(expected), " | ".join(actual)

        request.node.user_properties.append(
            ("conversion_test", {"input": markup, "expected": expected_text, "actual": actual_text})
        )
        if actual != expected:
            console.print(
                Panel.fit(
                    f"[bold]Input:[/bold] '{markup}'\n"
                    f"[bold green]Expected:[/bold green] '{expected_text}'\n"
                    f"[bold red]Actual:[/bold red] '{actual_text}'",
                    title=f"Assertion Failed: {request.node.name}",
                    border_style="red",
                )
            )
        assert actual == expected, f"Input '{markup}' should convert to '{expected_text}', got '{actual_text}'"
        return soup

    return _assert_converts
