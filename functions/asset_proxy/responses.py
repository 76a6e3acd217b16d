import json
import logging
from http import HTTPStatus

logger = logging.getLogger(__name__)

ALLOWED_HEADERS = "Content-Type, X-CF-Token, x-admin-key"
ALLOWED_METHODS = "OPTIONS, POST, DELETE"
PREFLIGHT_MAX_AGE = "3600"


def base_headers(origin):
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS
    }


def envelope(status, data, headers, error_message=None):
    """Wrap `data` in the {data, errorMessage} body of a proxy response."""
    try:
        body = json.dumps({"data": data, "errorMessage": error_message})
    except (TypeError, ValueError) as e:
        return server_error(e, headers)

    return {
        "statusCode": int(status),
        "headers": {**headers, "Content-Type": "application/json"},
        "body": body
    }


def client_error(status, headers):
    status = HTTPStatus(status)
    return envelope(status, None, headers, error_message=status.phrase)


def server_error(err, headers):
    logger.error("server error: %r", err, exc_info=err)
    status = HTTPStatus.INTERNAL_SERVER_ERROR

    return {
        "statusCode": int(status),
        "headers": {**headers, "Content-Type": "application/json"},
        "body": json.dumps({"data": None, "errorMessage": status.phrase})
    }


def preflight(headers):
    return {
        "statusCode": int(HTTPStatus.OK),
        "headers": {
            **headers,
            "Access-Control-Allow-Methods": ALLOWED_METHODS,
            "Access-Control-Max-Age": PREFLIGHT_MAX_AGE
        },
        "body": ""
    }
