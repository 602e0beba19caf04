"""Wake machines by calling an HTTP endpoint."""

import logging

import httpx

from woa.core.errors import SendError
from woa.core.machine import HTTPWake

logger = logging.getLogger(__name__)


def send_http(http: HTTPWake, timeout: float = 10.0) -> int:
    """
    Issue the configured wake request.

    Method, endpoint and body are sent exactly as configured.

    Returns:
        HTTP status code of the response

    Raises:
        SendError: On transport failure or a non-2xx response
    """
    method = http.method
    content = http.body.encode("utf-8") if http.body is not None else None
    logger.info("Sending HTTP wake request: %s %s", method, http.endpoint)
    try:
        resp = httpx.request(method, http.endpoint, content=content, timeout=timeout)
        resp.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise SendError(f"HTTP wake request to {http.endpoint} failed: {exc}") from exc
    logger.debug("HTTP wake request returned %d", resp.status_code)
    return resp.status_code
