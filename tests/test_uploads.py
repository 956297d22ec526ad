"""Media validation and upload endpoint tests."""

import pytest
from httpx import AsyncClient

from travloger.api import uploads
from travloger.services.storage import (
    MAX_IMAGE_SIZE,
    StorageError,
    build_storage_path,
    get_mime_type,
    safe_filename,
    validate_media,
)


class TestValidateMedia:
    def test_accepts_image_and_video(self):
        assert validate_media(b"\x89PNG", "photo.png") == (True, "")
        assert validate_media(b"\x00" * (MAX_IMAGE_SIZE + 1), "clip.mp4") == (True, "")

    def test_rejects_other_types(self):
        ok, message = validate_media(b"%PDF", "brochure.pdf")
        assert not ok
        assert message == "Invalid file type. Only images and videos are allowed"

    def test_rejects_empty(self):
        assert validate_media(b"", "photo.jpg") == (False, "File is empty")

    def test_size_limits(self):
        """Test the 4MB image and 20MB video limits."""
        ok, message = validate_media(b"\x00" * (MAX_IMAGE_SIZE + 1), "photo.jpg")
        assert not ok
        assert message == "File too large. Maximum size is 4MB"

        ok, message = validate_media(b"\x00" * (20 * 1024 * 1024 + 1), "clip.webm")
        assert message == "File too large. Maximum size is 20MB"

    def test_declared_mime_wins(self):
        assert validate_media(b"data", "noext", mime_type="image/avif") == (True, "")


def test_mime_type_from_extension():
    assert get_mime_type("PHOTO.JPG") == "image/jpeg"
    assert get_mime_type("archive.zip") == "application/octet-stream"


def test_safe_filename():
    assert safe_filename("My Trip (1).JPG") == "My_Trip_1.jpg"
    assert safe_filename("???.png") == "file.png"


def test_build_storage_path():
    assert build_storage_path("Hotel Icons", "Kashmir Valley", "logo.png", 1700000000000) == (
        "hotel-icons/kashmir-valley/1700000000000-logo.png"
    )
    assert build_storage_path("", "", "a b.mp4", 1) == "uploads/general/1-a_b.mp4"


class TestUploadEndpoint:
    @pytest.mark.asyncio
    async def test_upload(self, client: AsyncClient, monkeypatch):
        calls = {}

        async def fake_upload(file_content, original_filename, folder, slug, mime_type=None):
            calls.update(name=original_filename, folder=folder, slug=slug, mime=mime_type, size=len(file_content))
            return "packages/kashmir/1-cover.jpg", "https://cdn.test/packages/kashmir/1-cover.jpg"

        monkeypatch.setattr(uploads, "upload_media", fake_upload)

        response = await client.post(
            "/api/upload",
            files={"file": ("cover.jpg", b"\xff\xd8\xff", "image/jpeg")},
            data={"folder": "packages", "slug": "kashmir"},
        )
        assert response.status_code == 201
        assert response.json() == {
            "url": "https://cdn.test/packages/kashmir/1-cover.jpg",
            "path": "packages/kashmir/1-cover.jpg",
        }
        assert calls == {"name": "cover.jpg", "folder": "packages", "slug": "kashmir",
                         "mime": "image/jpeg", "size": 3}

    @pytest.mark.asyncio
    async def test_invalid_file_is_400(self, client: AsyncClient, monkeypatch):
        async def fake_upload(file_content, original_filename, folder, slug, mime_type=None):
            raise ValueError("Invalid file type. Only images and videos are allowed")

        monkeypatch.setattr(uploads, "upload_media", fake_upload)

        response = await client.post(
            "/api/upload",
            files={"file": ("notes.txt", b"hello", "text/plain")},
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_storage_failure_is_502(self, client: AsyncClient, monkeypatch):
        async def fake_upload(file_content, original_filename, folder, slug, mime_type=None):
            raise StorageError("Upload failed: bucket not found")

        monkeypatch.setattr(uploads, "upload_media", fake_upload)

        response = await client.post("/api/upload", files={"file": ("a.png", b"x", "image/png")})
        assert response.status_code == 502

    @pytest.mark.asyncio
    async def test_delete(self, client: AsyncClient, monkeypatch):
        removed = []

        async def fake_delete(storage_path):
            removed.append(storage_path)
            return True

        monkeypatch.setattr(uploads, "delete_media", fake_delete)

        response = await client.delete("/api/upload", params={"path": "packages/kashmir/1-cover.jpg"})
        assert response.status_code == 204
        assert removed == ["packages/kashmir/1-cover.jpg"]

    @pytest.mark.asyncio
    async def test_requires_login(self, client: AsyncClient, anonymous):
        response = await client.post("/api/upload", files={"file": ("a.png", b"x", "image/png")})
        assert response.status_code == 401
