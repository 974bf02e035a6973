"""
Minimal test configuration/fixtures for the image upload service.
"""

import base64
import io
import logging
import os
from pathlib import Path
from datetime import datetime

import pytest
from PIL import Image

from app.application.image_input import Visibility

# Set up basic logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def setup_logging():
    """Cấu hình logging cho toàn bộ ứng dụng test."""
    log_dir = Path("test/test_output/logs")
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "test_run.log"

    formatter = logging.Formatter(
        "[%(asctime)s] %(levelname)-8s [%(name)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = logging.FileHandler(filename=log_file, mode="a", encoding="utf-8")
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Avoid duplicated handlers between runs
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    # Noisy libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)

    logging.getLogger("app").setLevel(logging.DEBUG)
    logging.getLogger("test").setLevel(logging.DEBUG)

    return log_file


def pytest_configure(config):  # pylint: disable=unused-argument
    """Configure pytest for tests."""
    log_file = setup_logging()

    logger = logging.getLogger("pytest")
    logger.info("=" * 80)
    logger.info("BẮT ĐẦU CHẠY TEST")
    logger.info("=" * 80)
    logger.info("Thư mục làm việc: %s", os.getcwd())
    logger.info("Log file: %s", log_file)
    logger.info("-" * 80)


@pytest.fixture(autouse=True)
def log_test_name(request):
    """Log test name when test starts and finishes."""
    logger = logging.getLogger(request.node.nodeid)
    logger.info("🚀 Bắt đầu test: %s", request.node.name)
    start_time = datetime.now()

    def log_test_end():
        duration = (datetime.now() - start_time).total_seconds()
        has_rep_call = hasattr(request.node, "rep_call")
        if has_rep_call and request.node.rep_call.failed:
            logger.error("❌ Test thất bại sau %.2fs", duration)
        else:
            logger.info("✅ Test hoàn thành sau %.2fs", duration)
        logger.info("-" * 80)

    request.addfinalizer(log_test_end)


@pytest.fixture(autouse=True, scope="session")
def set_temp_base_dir():
    """Force temporary files to be created under test/temp for all tests."""
    base = Path("test/temp")
    base.mkdir(parents=True, exist_ok=True)
    os.environ["TEMP_BASE_DIR"] = str(base)
    yield


# -------------------- Image payloads --------------------
def _encode(fmt: str) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (8, 6), color="red").save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture(scope="session")
def png_bytes() -> bytes:
    return _encode("PNG")


@pytest.fixture(scope="session")
def jpeg_bytes() -> bytes:
    return _encode("JPEG")


@pytest.fixture(scope="session")
def gif_bytes() -> bytes:
    return _encode("GIF")


@pytest.fixture(scope="session")
def bmp_bytes() -> bytes:
    return _encode("BMP")


@pytest.fixture(scope="session")
def webp_bytes() -> bytes:
    return _encode("WEBP")


@pytest.fixture(scope="session")
def mpo_bytes() -> bytes:
    """Two-frame multi-picture JPEG, as written by stereo and burst cameras."""
    buffer = io.BytesIO()
    first = Image.new("RGB", (8, 6), color="red")
    second = Image.new("RGB", (8, 6), color="blue")
    first.save(buffer, format="MPO", save_all=True, append_images=[second])
    return buffer.getvalue()


@pytest.fixture(scope="session")
def svg_bytes() -> bytes:
    return (
        b'<?xml version="1.0" encoding="UTF-8"?>\n'
        b'<svg xmlns="http://www.w3.org/2000/svg" width="10" height="10">'
        b'<rect width="10" height="10" fill="red"/></svg>\n'
    )


@pytest.fixture(scope="session")
def text_bytes() -> bytes:
    return b"namespace Fixtures;\n\nclass Plain\n{\n    // nothing to see\n}\n"


@pytest.fixture(scope="session")
def png_b64(png_bytes) -> str:
    return base64.b64encode(png_bytes).decode("ascii")


# -------------------- Storage fake --------------------
class FakeStorage:
    """In-memory IObjectStorage recording every put."""

    def __init__(self, host: str = "s3.amazonaws.com") -> None:
        self.host = host
        self.objects: dict = {}
        self.calls: list = []

    def put(self, key, data, visibility, *, content_type=None):
        self.calls.append(
            {
                "key": key,
                "data": data,
                "visibility": Visibility(visibility),
                "content_type": content_type,
            }
        )
        self.objects[key] = data

    def object_url(self, bucket, key):
        return f"https://{bucket}.{self.host}/{key}"


@pytest.fixture
def fake_storage() -> FakeStorage:
    return FakeStorage()


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Add test result to report object."""
    outcome = yield
    rep = outcome.get_result()

    setattr(item, f"rep_{rep.when}", rep)
