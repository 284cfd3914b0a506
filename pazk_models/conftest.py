# (C) 2024 Irreducible Inc.

import logging
import os

import pytest
from hypothesis import HealthCheck, settings

# no per-example deadline: every protocol run spawns two worker threads.
settings.register_profile("dev", deadline=None, suppress_health_check=[HealthCheck.too_slow])
settings.register_profile("ci", parent=settings.get_profile("dev"), max_examples=500)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption("--runslow", action="store_true", default=False, help="run tests marked as slow")


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if config.getoption("--runslow"):
        return
    skip_slow = pytest.mark.skip(reason="needs --runslow")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def transcript_log(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Captures the rendered transcript lines which `execute` logs."""
    caplog.set_level(logging.INFO, logger="pazk_models.ips.protocol")
    return caplog
