"""Shared pytest configuration for lexparsec.

Hypothesis profiles:
    dev      local runs; 300 examples per property
    ci       CI=true; 50 derandomized examples, failure blobs printed
    verbose  HYPOTHESIS_PROFILE=verbose; 100 examples with progress output

HYPOTHESIS_PROFILE selects a profile explicitly and wins over CI.

Tests marked @pytest.mark.fuzz build random grammar shapes and run many
more examples. They are skipped unless selected with `pytest -m fuzz`.
"""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

_PHASES = [Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink]
_PROFILES = ("dev", "ci", "verbose")

settings.register_profile("dev", max_examples=300, phases=_PHASES)
settings.register_profile(
    "ci",
    max_examples=50,
    phases=_PHASES,
    derandomize=True,
    print_blob=True,
)
settings.register_profile(
    "verbose",
    max_examples=100,
    phases=_PHASES,
    verbosity=Verbosity.verbose,
)


def _select_profile() -> str:
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in _PROFILES:
        return explicit
    return "ci" if os.environ.get("CI") == "true" else "dev"


settings.load_profile(_select_profile())


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip fuzz-marked grammar properties unless `-m fuzz` selects them."""
    if "fuzz" in str(config.getoption("-m", default="")):
        return
    skip_fuzz = pytest.mark.skip(reason="grammar fuzzing; run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)
