from unittest.mock import AsyncMock, Mock

import pytest


@pytest.fixture
def mock_ws() -> Mock:
    ws = Mock()
    ws.request = AsyncMock(return_value=[])
    ws.request_upload = AsyncMock(return_value=None)
    ws.request_download = AsyncMock(return_value=b"")
    return ws
