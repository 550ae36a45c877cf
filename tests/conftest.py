"""Shared pytest setup: Hypothesis profiles, the fuzz marker and fixtures.

Profiles (max_examples is set here and nowhere else):
- dev: 500 examples, the local default
- ci: 50 derandomized examples, chosen when CI=true
- verbose: 100 examples with per-example output

HYPOTHESIS_PROFILE=<name> overrides the automatic choice.

Tests marked @pytest.mark.fuzz are long-running and skipped unless the
run selects them with ``pytest -m fuzz``.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from fluentsyntax.syntax import FluentParser, FluentSerializer

_ALL_PHASES = [Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink]

settings.register_profile("dev", max_examples=500, phases=_ALL_PHASES)
settings.register_profile(
    "ci",
    max_examples=50,
    phases=_ALL_PHASES,
    derandomize=True,
    print_blob=True,
)
settings.register_profile(
    "verbose",
    max_examples=100,
    phases=_ALL_PHASES,
    verbosity=Verbosity.verbose,
)


def _profile_name() -> str:
    requested = os.environ.get("HYPOTHESIS_PROFILE")
    if requested in {"dev", "ci", "verbose"}:
        return requested
    return "ci" if os.environ.get("CI") == "true" else "dev"


settings.load_profile(_profile_name())


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "fuzz: long-running property tests, skipped unless selected with -m fuzz",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip fuzz tests when the -m expression does not mention them."""
    if "fuzz" in str(config.getoption("-m", default="")):
        return

    skip = pytest.mark.skip(reason="fuzz test; run with: pytest -m fuzz")
    for item in items:
        if item.get_closest_marker("fuzz") is not None:
            item.add_marker(skip)


@pytest.fixture
def parser() -> FluentParser:
    """Parser without span tracking."""
    return FluentParser()


@pytest.fixture
def span_parser() -> FluentParser:
    """Parser that attaches spans to every node."""
    return FluentParser(with_spans=True)


@pytest.fixture
def serializer() -> FluentSerializer:
    return FluentSerializer()
