"""Tests for the asset upload store."""

import pytest
from hypothesis import given, strategies as st

from pagebuilder.editing import validate
from pagebuilder.storage import AssetNotFoundError, AssetRejectedError, AssetStore, sanitize_filename

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def assets(tmp_path, metrics):
    return AssetStore(tmp_path / "uploads", public_base_url="http://cdn.test/", max_size=1024, metrics=metrics)


@pytest.mark.unit
class TestAssetStore:
    """Test upload validation and storage."""

    def test_upload(self, assets):
        asset = assets.upload(PNG, "logo.png", "image/png")

        assert asset.url == f"http://cdn.test/uploads/{asset.filename}"
        assert asset.filename.startswith("asset_")
        assert asset.filename.endswith("-logo.png")
        assert asset.original_name == "logo.png"
        assert asset.content_type == "image/png"
        assert asset.size == len(PNG)
        assert (assets.upload_dir / asset.filename).read_bytes() == PNG

    def test_url_is_valid_image_value(self, assets):
        asset = assets.upload(PNG, "my photo.png", "image/png")
        assert validate(asset.url, "image").valid

    def test_content_type_parameters_ignored(self, assets):
        asset = assets.upload(b"body{}", "site.css", "text/css; charset=utf-8")
        assert asset.content_type == "text/css"

    @pytest.mark.parametrize("content_type", ["text/html", "application/x-msdownload", ""])
    def test_disallowed_type(self, assets, content_type):
        with pytest.raises(AssetRejectedError):
            assets.upload(PNG, "file.bin", content_type)

    def test_too_large(self, assets):
        with pytest.raises(AssetRejectedError):
            assets.upload(b"x" * 1025, "big.png", "image/png")

    def test_empty(self, assets):
        with pytest.raises(AssetRejectedError):
            assets.upload(b"", "empty.png", "image/png")

    def test_same_name_twice_gets_distinct_files(self, assets):
        first = assets.upload(PNG, "a.png", "image/png")
        second = assets.upload(PNG, "a.png", "image/png")
        assert first.filename != second.filename

    def test_delete(self, assets):
        asset = assets.upload(PNG, "a.png", "image/png")

        assets.delete(asset.filename)

        assert not (assets.upload_dir / asset.filename).exists()
        with pytest.raises(AssetNotFoundError):
            assets.delete(asset.filename)

    @pytest.mark.parametrize("name", ["../secret", "a/b.png", "missing.png"])
    def test_delete_unknown(self, assets, name):
        with pytest.raises(AssetNotFoundError):
            assets.delete(name)


@pytest.mark.unit
def test_sanitize_filename():
    assert sanitize_filename("../../etc/passwd") == "passwd"
    assert sanitize_filename("C:\\Users\\me\\My Photo.PNG") == "My-Photo.PNG"
    assert sanitize_filename("...") == "file"


@given(st.text(max_size=40))
def test_sanitized_names_are_safe(name):
    cleaned = sanitize_filename(name)

    assert cleaned
    assert "/" not in cleaned and "\\" not in cleaned
    assert not cleaned.startswith(".")
