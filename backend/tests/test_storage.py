"""
Tests for dish image storage backends.
"""

import boto3
import pytest
from botocore.stub import ANY, Stubber

from rest_api.services.storage.local_backend import LocalBackend
from rest_api.services.storage.s3_backend import S3Backend
from shared.config.settings import settings


class TestLocalBackend:
    def test_save_and_serve(self, tmp_path):
        storage = LocalBackend(base_dir=str(tmp_path), base_url="/media/")

        stored = storage.save("../Paneer Tikka.JPG", b"img", "image/jpeg")

        assert stored.endswith("_Paneer_Tikka.jpg")
        assert (tmp_path / "dishes" / stored).read_bytes() == b"img"
        assert storage.exists(stored)
        assert storage.url(stored) == f"/media/dishes/{stored}"

    def test_unsafe_names_never_exist(self, tmp_path):
        storage = LocalBackend(base_dir=str(tmp_path), base_url="/media")
        (tmp_path / "secret.txt").write_text("x")

        assert not storage.exists("../secret.txt")
        assert not storage.exists("missing.png")


class TestS3Backend:
    @pytest.fixture
    def s3(self, monkeypatch):
        monkeypatch.setattr(settings, "s3_bucket", "menu-images")
        client = boto3.client(
            "s3",
            region_name="us-east-1",
            aws_access_key_id="test",
            aws_secret_access_key="test",
        )
        with Stubber(client) as stubber:
            yield S3Backend(client=client), stubber

    def test_save_uploads_under_dish_prefix(self, s3):
        storage, stubber = s3
        stubber.add_response(
            "put_object",
            {},
            {
                "Bucket": storage.bucket,
                "Key": ANY,
                "Body": b"img",
                "ContentType": "image/png",
                "CacheControl": "public, max-age=86400",
            },
        )

        stored = storage.save("dosa.png", b"img", "image/png")

        assert stored.endswith("_dosa.png")
        stubber.assert_no_pending_responses()

    def test_exists(self, s3):
        storage, stubber = s3
        stubber.add_response("head_object", {}, {"Bucket": storage.bucket, "Key": "dishes/a.png"})
        stubber.add_client_error("head_object", service_error_code="404", http_status_code=404)

        assert storage.exists("a.png") is True
        assert storage.exists("b.png") is False

    def test_presigned_url(self, s3):
        storage, _ = s3

        url = storage.url("a.png")

        assert "dishes/a.png" in url
        assert "Expires=" in url or "X-Amz-Expires=" in url
