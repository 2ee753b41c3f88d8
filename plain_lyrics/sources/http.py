from __future__ import annotations

import gzip
import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping

import requests

from .errors import FormatError, NetworkError

logger = logging.getLogger(__name__)

USER_AGENT = "plain-lyrics/0.1"

_GZIP_MAGIC = b"\x1f\x8b"


@dataclass(frozen=True, slots=True)
class Timeouts:
    connect_s: float = 15.0
    read_s: float = 10.0

    def as_requests(self) -> tuple[float, float]:
        return (self.connect_s, self.read_s)


def http_get(
    url: str,
    *,
    params: Mapping[str, str] | None = None,
    headers: Mapping[str, str] | None = None,
    timeouts: Timeouts = Timeouts(),
) -> requests.Response:
    """
    One GET, no retries. Anything but HTTP 200 is a NetworkError.

    Redirects are followed by requests, so a 3xx that still reaches us is an error as well.
    """
    all_headers = {"User-Agent": USER_AGENT}
    if headers:
        all_headers.update(headers)

    try:
        r = requests.get(url, params=params, headers=all_headers, timeout=timeouts.as_requests())
    except (requests.RequestException, ValueError) as e:
        raise NetworkError(f"GET {url} failed: {e}") from e

    if r.status_code != 200:
        raise NetworkError(f"GET {url} answered HTTP {r.status_code}")
    logger.debug("GET %s -> 200 (%s bytes)", r.url, len(r.content or b""))
    return r


def decode_body(r: requests.Response) -> str:
    body = r.content or b""
    # requests normally inflates Content-Encoding: gzip itself; this covers bodies it left alone
    if body.startswith(_GZIP_MAGIC):
        try:
            body = gzip.decompress(body)
        except (OSError, EOFError) as e:
            raise NetworkError(f"broken gzip body from {r.url}: {e}") from e
    return body.decode("utf-8", errors="replace")


def parse_json(r: requests.Response) -> Any:
    text = decode_body(r)
    try:
        return json.loads(text)
    except ValueError as e:
        raise FormatError(f"response from {r.url} is not JSON: {e}") from e
