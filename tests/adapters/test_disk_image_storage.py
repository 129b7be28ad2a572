"""Tests for DiskImageStorage."""

from __future__ import annotations

from pathlib import Path

from campus_books.adapters.disk_image_storage import DiskImageStorage
from campus_books.domain.listing import ImageUpload
from factories import JPEG_BYTES, PNG_BYTES, jpeg_upload, png_upload


def test_save_writes_bytes_and_returns_public_path(tmp_path: Path) -> None:
    storage = DiskImageStorage(tmp_path / "uploads")

    path = storage.save(png_upload())

    assert path.startswith("uploads/")
    assert path.endswith(".png")
    stored = tmp_path / "uploads" / Path(path).name
    assert stored.read_bytes() == PNG_BYTES


def test_extension_follows_media_type_not_filename(tmp_path: Path) -> None:
    storage = DiskImageStorage(tmp_path)
    image = ImageUpload(filename="../../evil.sh", content_type="image/jpeg", content=JPEG_BYTES)

    path = storage.save(image)

    assert path.endswith(".jpg")
    assert "evil" not in path
    assert list(tmp_path.iterdir()) == [tmp_path / Path(path).name]


def test_names_are_unique(tmp_path: Path) -> None:
    storage = DiskImageStorage(tmp_path)

    first = storage.save(jpeg_upload("same.jpg"))
    second = storage.save(jpeg_upload("same.jpg"))

    assert first != second


def test_custom_url_prefix(tmp_path: Path) -> None:
    storage = DiskImageStorage(tmp_path, url_prefix="/media/")

    assert storage.save(png_upload()).startswith("media/")


def test_delete_removes_file(tmp_path: Path) -> None:
    storage = DiskImageStorage(tmp_path)
    path = storage.save(png_upload())

    storage.delete(path)

    assert list(tmp_path.iterdir()) == []


def test_delete_missing_file_is_ignored(tmp_path: Path) -> None:
    DiskImageStorage(tmp_path).delete("uploads/does-not-exist.png")
