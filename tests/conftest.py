#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import io

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from prettyval.printer import configure


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def default_options():
    """Restore the process-wide default options after every test."""
    yield
    configure(preset="default")


@pytest.fixture
def sink() -> io.StringIO:
    """In-memory text sink."""
    return io.StringIO()
