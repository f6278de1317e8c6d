import io
from unittest.mock import Mock

import pytest

from usb2snes_cli.client import Usb2SnesClient
from usb2snes_cli.config import Usb2SnesConfig
from usb2snes_cli.tests.utils.fake_websocket import FakeConnectionFactory, FakeWebSocket

DEVICE = "SD2SNES COM3"


@pytest.fixture
def config() -> Usb2SnesConfig:
    return Usb2SnesConfig()


@pytest.fixture
def fake_ws() -> FakeWebSocket:
    return FakeWebSocket()


@pytest.fixture
def connection_factory(fake_ws: FakeWebSocket) -> FakeConnectionFactory:
    return FakeConnectionFactory(fake_ws)


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def mock_client() -> Mock:
    client = Mock(spec=Usb2SnesClient)
    client.url = "ws://localhost:8080"
    client.device_list.return_value = [DEVICE]
    client.get_info.return_value = []
    client.list_files.return_value = []
    return client
