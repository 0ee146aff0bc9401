#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import io

# Third Party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from valprint.options import configure


class FailingSink(io.StringIO):
    """StringIO that raises OSError once `fail_after` writes have succeeded."""

    def __init__(self, fail_after: int):
        super().__init__()
        self.fail_after = fail_after
        self.calls = 0

    def write(self, s: str) -> int:
        self.calls += 1
        if self.calls > self.fail_after:
            raise OSError("disk full")
        return super().write(s)


# Fixtures -------------------------------------------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def default_options():
    """Restore module default options around every test."""
    configure(preset="default")
    yield
    configure(preset="default")


@pytest.fixture
def failing_sink():
    """Factory for sinks that fail after a number of successful writes."""

    def _create(fail_after: int = 0) -> FailingSink:
        return FailingSink(fail_after)

    return _create
