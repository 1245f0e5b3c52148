"""REST client for the Firebase Realtime Database."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, TypeVar

import requests

from arena.core.constants import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_RETRY_DELAY,
    DEFAULT_TIMEOUT,
    ETAG_REQUEST_HEADER,
    ETAG_RESPONSE_HEADER,
    IF_MATCH_HEADER,
    PRECONDITION_FAILED,
)
from arena.errors import AllocationExhausted, DecodeError, PreconditionFailed, StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")
Decoder = Callable[[Any], T]

# Exceptions a model decoder raises when a document does not fit its shape
DECODE_FAILURES = (KeyError, TypeError, ValueError, AttributeError)


class DocumentStoreClient:
    """Reads and writes JSON documents addressed by slash-separated paths.

    Every call is a blocking round-trip; the client keeps no cached state
    beyond its configuration and the underlying ``requests.Session``, so one
    instance can be shared by any number of repositories and threads.

    ``auth_token`` is sent as the ``auth_param`` query parameter. It may be a
    callable, which is invoked per request so expiring tokens can refresh.
    """

    def __init__(  # noqa: PLR0913
        self,
        base_url: str,
        auth_token: str | Callable[[], str] | None = None,
        auth_param: str = "auth",
        session: requests.Session | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        retry_delay: float = DEFAULT_RETRY_DELAY,
    ) -> None:
        """Initialize the client."""
        if not base_url:
            raise ValueError("A database URL is required.")
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.base_url = base_url.rstrip("/")
        self.auth_token = auth_token
        self.auth_param = auth_param
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay

    def __enter__(self) -> DocumentStoreClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Release the pooled HTTP connections."""
        self.session.close()

    def url_for(self, path: str) -> str:
        """Return the REST URL of a document path."""
        return f"{self.base_url}/{path.strip('/')}.json"

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        body: Any = None,
        headers: dict[str, str] | None = None,
        send_body: bool = False,
    ) -> requests.Response:
        """Issue one HTTP request and map failures onto StoreError."""
        token = self.auth_token() if callable(self.auth_token) else self.auth_token
        params = {self.auth_param: token} if token else None
        request_headers = dict(headers or {})
        data = None
        if send_body:
            try:
                data = json.dumps(body)
            except (TypeError, ValueError) as e:
                raise StoreError(f"Could not encode value for {path}: {e}") from e
            request_headers["Content-Type"] = "application/json"

        try:
            response = self.session.request(
                method,
                self.url_for(path),
                params=params,
                headers=request_headers or None,
                data=data,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise StoreError(f"{method} {path} failed: {e}") from e

        status = response.status_code
        if status == PRECONDITION_FAILED:
            raise PreconditionFailed(f"{method} {path}: ETag mismatch.")
        if not 200 <= status < 300:  # noqa: PLR2004
            raise StoreError(f"{method} {path} returned HTTP {status}.", status)
        return response

    @staticmethod
    def _json(response: requests.Response, path: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Malformed JSON at {path}: {e}") from e

    @staticmethod
    def _decode(value: Any, decoder: Decoder | None, path: str) -> Any:
        if decoder is None:
            return value
        try:
            return decoder(value)
        except DECODE_FAILURES as e:
            raise DecodeError(f"Could not decode document at {path}: {e}") from e

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def read(self, path: str, decoder: Decoder | None = None) -> Any:
        """Fetch and decode a document; a stored ``null`` reads as None."""
        value = self._json(self._request("GET", path), path)
        if value is None:
            return None
        return self._decode(value, decoder, path)

    def read_collection(
        self, path: str, decoder: Decoder | None = None
    ) -> dict[str, Any]:
        """Fetch a collection as a mapping of id string to decoded entity.

        The database renders a node whose keys are small sequential integers as
        a JSON array, with ``null`` holes for missing keys. Both encodings are
        normalised to the same mapping. Entries that fail to decode are logged
        and skipped.
        """
        raw = self._json(self._request("GET", path), path)
        if raw is None:
            return {}
        if isinstance(raw, list):
            entries = [(str(i), v) for i, v in enumerate(raw) if v is not None]
        elif isinstance(raw, dict):
            entries = [(str(k), v) for k, v in raw.items() if v is not None]
        else:
            raise DecodeError(f"Expected a collection at {path}, got {type(raw).__name__}.")

        collection = {}
        for key, value in entries:
            try:
                collection[key] = self._decode(value, decoder, f"{path}/{key}")
            except DecodeError as e:
                logger.warning(f"Skipping entry: {e}")
        return collection

    def read_with_etag(self, path: str) -> tuple[Any, str | None]:
        """Fetch a document along with its current version token."""
        response = self._request("GET", path, headers={ETAG_REQUEST_HEADER: "true"})
        etag = response.headers.get(ETAG_RESPONSE_HEADER) or None
        return self._json(response, path), etag

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def write(self, path: str, value: Any) -> None:
        """Replace the document at path."""
        self._request("PUT", path, value, send_body=True)

    def write_if_match(self, path: str, value: Any, etag: str) -> None:
        """Replace the document only if it is still at version etag."""
        self._request(
            "PUT", path, value, headers={IF_MATCH_HEADER: etag}, send_body=True
        )

    def patch(self, path: str, values: dict[str, Any]) -> None:
        """Update the named children of a document, leaving the rest intact."""
        self._request("PATCH", path, values, send_body=True)

    def delete(self, path: str) -> None:
        """Remove the document at path."""
        self._request("DELETE", path)

    # ------------------------------------------------------------------
    # Counters
    # ------------------------------------------------------------------

    def next_id(self, counter_path: str) -> int:
        """Atomically advance the integer counter at counter_path.

        Compare-and-swap over conditional PUT: a 412 means another writer
        advanced the counter first, so the read is repeated. Any other failure
        propagates immediately, and running out of attempts raises
        AllocationExhausted rather than returning a possibly-duplicate id.
        """
        for attempt in range(1, self.max_attempts + 1):
            current, etag = self.read_with_etag(counter_path)
            next_value = _counter_value(current, counter_path) + 1

            if etag is None:
                # Uninitialised counter: nothing to race against yet
                self.write(counter_path, next_value)
                return next_value

            try:
                self.write_if_match(counter_path, next_value, etag)
                return next_value
            except PreconditionFailed:
                logger.info(
                    f"Counter {counter_path} moved during attempt "
                    f"{attempt}/{self.max_attempts}; retrying."
                )
                if attempt < self.max_attempts and self.retry_delay > 0:
                    time.sleep(self.retry_delay * attempt)

        raise AllocationExhausted(counter_path, self.max_attempts)


def _counter_value(value: Any, path: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"Counter at {path} is not an integer: {value!r}")
    return value
