import base64
import binascii
from io import BytesIO

import pydantic
from PIL import Image, UnidentifiedImageError
from pydantic import BaseModel, ConfigDict, Field, StrictStr

from asset_proxy.exceptions import ValidationError


class UploadPayload(BaseModel):
    """Body of an upload: `{"image": <base64>, "fileExt": <ext>}`."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    image: StrictStr = Field(..., min_length=1)
    file_ext: StrictStr = Field(..., alias="fileExt", min_length=1)

    @classmethod
    def from_json(cls, body):
        try:
            return cls.model_validate_json(body or "")
        except pydantic.ValidationError as e:
            raise ValidationError(f"invalid body: {e}") from e


class DeleteRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: StrictStr = Field(..., min_length=1)

    @classmethod
    def from_event(cls, event):
        try:
            return cls.model_validate(event.get("pathParameters") or {})
        except pydantic.ValidationError as e:
            raise ValidationError(f"invalid path parameters: {e}") from e


def request_body(event):
    """Return the proxy event body as text.

    API Gateway base64-encodes bodies it treats as binary media.
    """
    body = event.get("body") or ""
    if event.get("isBase64Encoded", False):
        try:
            body = base64.b64decode(body).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise ValidationError(f"can't decode request body: {e}") from e
    return body


def decode_image(payload):
    # Line breaks are allowed, any other non-alphabet character is not.
    data = payload.image.replace("\r", "").replace("\n", "")
    try:
        return base64.b64decode(data, validate=True)
    except binascii.Error as e:
        raise ValidationError(f"error decoding base64 image: {e}") from e


def sniff_content_type(data):
    """Infer the media type of `data` from its content, or None.

    Raises ValidationError for images whose declared size is over
    Pillow's decompression bomb limit.
    """
    if not data:
        return None

    try:
        with Image.open(BytesIO(data)) as image:
            fmt = image.format
    except Image.DecompressionBombError as e:
        raise ValidationError(f"image too large: {e}") from e
    except (UnidentifiedImageError, OSError, ValueError):
        return None

    if not fmt:
        return None
    return Image.MIME.get(fmt, f"image/{fmt.lower()}")


def is_image(content_type):
    return bool(content_type) and content_type.split("/", 1)[0] == "image"
