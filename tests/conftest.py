import pytest

from codebreaker.logs import configure_logging


@pytest.fixture(autouse=True, scope="session")
def _quiet_logs():
    configure_logging("WARNING")
