import pytest

from netapp import create_app
from netapp.config import Config

TLS_CAPTURE = (
    "frame.time_epoch,ip.src,tcp.srcport,tcp.dstport,frame.len,_ws.col.Protocol\n"
    "100.0,10.0.0.1,443,50000,1500,TLS\n"
    "100.5,10.0.0.1,443,50001,1400,TLS\n"
)


@pytest.fixture
def tls_capture():
    return TLS_CAPTURE


@pytest.fixture
def app(tmp_path):
    class TestConfig(Config):
        TESTING = True
        UPLOAD_FOLDER = str(tmp_path / "uploads")
        LOG_FOLDER = str(tmp_path / "logs")
        LOG_FILE = str(tmp_path / "logs" / "app.log")
        LOG_LEVEL = "DEBUG"
        SERIES_MAX_POINTS = 100

    return create_app(TestConfig)


@pytest.fixture
def client(app):
    return app.test_client()
