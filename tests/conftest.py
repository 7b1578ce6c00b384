import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog():
    """CLI runs bind structlog to the captured stderr of the current test."""

    yield
    structlog.reset_defaults()
