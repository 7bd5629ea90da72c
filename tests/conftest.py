import pytest


@pytest.fixture
def anyio_backend():
    # The viewer loops schedule asyncio tasks directly.
    return "asyncio"
