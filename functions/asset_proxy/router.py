import json
import logging
import uuid
from http import HTTPStatus

from asset_proxy.exceptions import StorageError, ValidationError
from asset_proxy.payload import (
    DeleteRequest,
    UploadPayload,
    decode_image,
    is_image,
    request_body,
    sniff_content_type,
)
from asset_proxy.responses import (
    base_headers,
    client_error,
    envelope,
    preflight,
    server_error,
)
from asset_proxy.storage import AssetStore

logger = logging.getLogger(__name__)

TOKEN_HEADER = "X-CF-Token"
ADMIN_HEADER = "x-admin-key"


def get_header(event, name):
    headers = event.get("headers") or {}
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


class Router:
    """Dispatches API Gateway proxy events to the upload and delete flows."""

    def __init__(self, store: AssetStore, settings):
        self._store = store
        self._settings = settings
        self.headers = base_headers(settings.origin_url)

    def __call__(self, event):
        method = (event.get("httpMethod") or "").upper()
        logger.info(json.dumps({"message": "router received request", "method": method}))

        try:
            if not self._settings.local_mode:
                token = self._settings.cf_token
                if not token:
                    return server_error(
                        RuntimeError("AWS_CF_TOKEN is not configured"), self.headers
                    )
                if get_header(event, TOKEN_HEADER) != token:
                    return client_error(HTTPStatus.UNAUTHORIZED, self.headers)

            if method == "OPTIONS":
                return preflight(self.headers)
            if method == "POST":
                return self._admin_only(event, self.upload)
            if method == "DELETE":
                return self._admin_only(event, self.delete)

            logger.warning("unsupported HTTP method %r", method)
            return client_error(HTTPStatus.METHOD_NOT_ALLOWED, self.headers)

        except Exception as e:
            return server_error(e, self.headers)

    def _admin_only(self, event, flow):
        admin_key = self._settings.admin_key
        if admin_key and get_header(event, ADMIN_HEADER) != admin_key:
            return client_error(HTTPStatus.UNAUTHORIZED, self.headers)
        return flow(event)

    def upload(self, event):
        try:
            payload = UploadPayload.from_json(request_body(event))
            image_bytes = decode_image(payload)
            content_type = sniff_content_type(image_bytes)
        except ValidationError as e:
            logger.info("invalid upload: %s", e)
            return client_error(HTTPStatus.BAD_REQUEST, self.headers)

        if not is_image(content_type):
            logger.info("uploaded file is not an image")
            return client_error(HTTPStatus.BAD_REQUEST, self.headers)

        file_name = f"{uuid.uuid4()}.{payload.file_ext}"
        logger.info("fileName: %s", file_name)

        try:
            self._store.put(file_name, image_bytes, content_type)
        except StorageError as e:
            return server_error(e, self.headers)

        return envelope(HTTPStatus.CREATED, file_name, self.headers)

    def delete(self, event):
        try:
            object_id = DeleteRequest.from_event(event).id
        except ValidationError as e:
            logger.info("invalid delete: %s", e)
            return client_error(HTTPStatus.BAD_REQUEST, self.headers)

        logger.info("deleting id: %s", object_id)
        try:
            self._store.delete(object_id)
        except StorageError as e:
            return server_error(e, self.headers)

        return envelope(HTTPStatus.OK, object_id, self.headers)
