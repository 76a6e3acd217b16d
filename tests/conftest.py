"""Shared fixtures: settings, proxy events, a fake store and test images."""

import base64
import json
from io import BytesIO

import pytest
from PIL import Image

from asset_proxy.config import Settings
from asset_proxy.exceptions import StorageError
from asset_proxy.router import Router

TOKEN = "cf-secret"
ORIGIN = "https://example.com"


class FakeStore:
    """In-memory stand-in for S3AssetStore."""

    def __init__(self, fail=False):
        self.objects = {}
        self.fail = fail

    def put(self, key, body, content_type):
        if self.fail:
            raise StorageError("put failed: AccessDenied secret-bucket-detail")
        self.objects[key] = (body, content_type)

    def delete(self, key):
        if self.fail:
            raise StorageError("delete failed: AccessDenied secret-bucket-detail")
        self.objects.pop(key, None)


def image_bytes(fmt="PNG"):
    buffer = BytesIO()
    Image.new("RGB", (4, 4), color=(255, 0, 0)).save(buffer, format=fmt)
    return buffer.getvalue()


def make_event(method, body=None, headers=None, path_parameters=None, token=TOKEN):
    all_headers = {"X-CF-Token": token} if token is not None else {}
    all_headers.update(headers or {})
    return {
        "httpMethod": method,
        "headers": all_headers,
        "pathParameters": path_parameters,
        "body": body,
        "isBase64Encoded": False,
    }


def upload_body(data=None, file_ext="png"):
    payload = {"image": base64.b64encode(data or image_bytes()).decode("ascii")}
    if file_ext is not None:
        payload["fileExt"] = file_ext
    return json.dumps(payload)


@pytest.fixture
def aws_env(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.delenv("S3_ENDPOINT_URL", raising=False)
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)


@pytest.fixture
def settings():
    return Settings(bucket_name="assets-bucket", cf_token=TOKEN, origin_url=ORIGIN)


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def router(store, settings):
    return Router(store, settings)
