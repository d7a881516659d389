from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock

import pytest

from aretry.backoff.sleeper import Sleeper
from aretry.synchronization import get_context

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_sleeper() -> Sleeper:
    """Create a mock sleeper so that backoff tests do not wait."""
    return Mock(spec=Sleeper)


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callable usable as work or recovery callback."""
    return Mock(return_value="result")


@pytest.fixture(autouse=True)
def no_active_context() -> Generator[None, None, None]:
    """Check that no test leaks an active retry context."""
    assert get_context() is None
    yield
    assert get_context() is None
