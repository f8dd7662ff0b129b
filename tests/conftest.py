import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog():
    # CLI runs bind log output to the runner's (later closed) stderr.
    yield
    structlog.reset_defaults()
