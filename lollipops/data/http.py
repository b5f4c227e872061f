"""HTTP access shared by the annotation providers"""

import gzip

import requests

from ..errors import DataError
from ..logging_config import get_logger

logger = get_logger(__name__)

REQUEST_TIMEOUT = 30  # seconds
GZIP_MAGIC = b"\x1f\x8b"


def http_get(url: str, params: dict | None = None) -> requests.Response:
    """
    GET a URL, raising on transport errors and non-2xx responses

    Raises:
        requests.RequestException: On connection failures, timeouts and HTTP errors
    """
    logger.info(f"GET {url}")
    response = requests.get(url, params=params, timeout=REQUEST_TIMEOUT)
    response.raise_for_status()
    return response


def get_text(url: str, params: dict | None = None) -> str:
    """
    Response body as text

    UniProt sometimes serves gzip bodies without a Content-Encoding header,
    so compressed payloads are unpacked here.
    """
    content = http_get(url, params).content
    if content.startswith(GZIP_MAGIC):
        content = gzip.decompress(content)
    return content.decode("utf-8")


def get_json(url: str, params: dict | None = None):
    """
    Response body decoded as JSON, None for an empty body (HTTP 204)

    Raises:
        DataError: If the body is not valid JSON
    """
    response = http_get(url, params)
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as e:
        raise DataError(f"Invalid JSON from {url}: {e}") from e
