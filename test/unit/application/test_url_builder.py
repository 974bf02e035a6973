import pytest

from app.application.policies import UrlBuilder
from app.core.exceptions import ConfigurationError


class RecordingStorage:
    def __init__(self, url: str | None = None) -> None:
        self.url = url
        self.requests = []

    def object_url(self, bucket, key):
        self.requests.append((bucket, key))
        return self.url or f"http://s3.com/{bucket}/{key}"

    def put(self, key, data, visibility, *, content_type=None):  # pragma: no cover
        raise AssertionError("not used")


def make_builder(storage=None, **kwargs) -> UrlBuilder:
    kwargs.setdefault("default_bucket", "aws_bucket")
    return UrlBuilder(storage or RecordingStorage(), **kwargs)


@pytest.mark.unit
def test_raw_url_uses_default_bucket():
    storage = RecordingStorage()
    builder = make_builder(storage)

    assert builder.raw_url("file_key.png") == "http://s3.com/aws_bucket/file_key.png"
    assert storage.requests == [("aws_bucket", "file_key.png")]


@pytest.mark.unit
def test_raw_url_from_custom_bucket():
    storage = RecordingStorage()
    builder = make_builder(storage)

    assert builder.raw_url("file_key.png", "custom_bucket") == "http://s3.com/custom_bucket/file_key.png"
    assert storage.requests == [("custom_bucket", "file_key.png")]


@pytest.mark.unit
def test_public_url_without_cdn_is_raw_url():
    builder = make_builder()
    assert builder.public_url("file_key.png") == builder.raw_url("file_key.png")


@pytest.mark.unit
def test_public_url_unknown_default_cdn_is_raw_url():
    builder = make_builder(default_cdn="missing", cdn_domains={"other": "http://media.other.com"})
    assert builder.public_url("k.png") == builder.raw_url("k.png")


@pytest.mark.unit
def test_public_url_with_explicit_cdn():
    storage = RecordingStorage("https://aws_bucket.s3.amazonaws.com/images/k.png?v=2#top")
    builder = make_builder(storage)

    url = builder.public_url("images/k.png", "http://cdn.example.com")

    assert url == "http://cdn.example.com/images/k.png?v=2#top"


@pytest.mark.unit
def test_public_url_with_default_cdn():
    builder = make_builder(
        default_cdn="default_cdn1",
        cdn_domains={"default_cdn1": "http://media.default_cdn1.com"},
    )

    assert builder.public_url("file_key.png") == "http://media.default_cdn1.com/aws_bucket/file_key.png"


@pytest.mark.unit
def test_explicit_cdn_wins_over_default():
    builder = make_builder(
        default_cdn="default_cdn1",
        cdn_domains={"default_cdn1": "http://media.default_cdn1.com"},
    )

    url = builder.public_url("file_key.png", "https://media.custom_cdn.com/", "bucket2")

    assert url == "https://media.custom_cdn.com/bucket2/file_key.png"


@pytest.mark.unit
def test_resizer_url_keeps_placeholders():
    builder = make_builder(resizer_base_url="https://resize.example.com")

    url = builder.resizer_url("https://cdn.example.com/images/a b.png")

    assert url == (
        "https://resize.example.com/?source=https://cdn.example.com/images/a b.png"
        "&height={height}&width={width}"
    )


@pytest.mark.unit
def test_resizer_url_with_explicit_size():
    builder = make_builder(resizer_base_url="https://resize.example.com/")
    assert builder.resizer_url("a.png", width="100", height="50") == (
        "https://resize.example.com/?source=a.png&height=50&width=100"
    )


@pytest.mark.unit
def test_resizer_url_requires_configuration():
    with pytest.raises(ConfigurationError) as exc_info:
        make_builder().resizer_url("a.png")
    assert exc_info.value.config_key == "resizer_url"
