"""Directus REST client for collection and field metadata.

Fetches ``/collections`` and ``/fields`` and turns them into collection
descriptors. Failures surface as :class:`MetadataFetchError` with the
underlying ``requests`` exception kept as ``__cause__``.
"""

from typing import Any
from urllib.parse import urlparse

import requests

from .codegen.core.schema import CollectionDescriptor, build_collections
from .logging_config import get_logger

logger = get_logger(__name__)


class MetadataFetchError(Exception):
    """Raised when collection metadata cannot be retrieved."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class MetadataAuthError(MetadataFetchError):
    """Raised when the API rejects the credentials (HTTP 401/403)."""

    pass


class DirectusClient:
    """Minimal Directus API client authenticated with a static token."""

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: int = 30,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Directus instance URL, e.g. ``http://localhost:8055``.
            token: Static access token sent as a bearer token.
            timeout: Request timeout in seconds.
            session: Optional pre-built session (useful for tests).

        Raises:
            MetadataFetchError: If the URL is not absolute.
        """
        parsed_url = urlparse(base_url)
        if not all([parsed_url.scheme, parsed_url.netloc]):
            logger.error(f"Invalid Directus URL: {base_url}")
            raise MetadataFetchError(f"Invalid Directus URL: {base_url}", url=base_url)

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers["Accept"] = "application/json"
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def get(self, path: str) -> Any:
        """GET an API path and unwrap the ``data`` envelope.

        Args:
            path: API path such as ``/collections``.

        Returns:
            The ``data`` member of the JSON response.

        Raises:
            MetadataAuthError: On HTTP 401/403.
            MetadataFetchError: On any other transport, HTTP or decoding error.
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.debug(f"GET {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.Timeout as e:
            logger.error(f"Request timeout for URL: {url}")
            raise MetadataFetchError(f"Request timeout for URL: {url}", url=url) from e
        except requests.exceptions.ConnectionError as e:
            logger.error(f"Connection error for URL {url}: {e}")
            raise MetadataFetchError(f"Connection error for URL: {url}", url=url) from e
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            logger.error(f"HTTP error {status_code} for URL: {url}")
            error_class = MetadataAuthError if status_code in (401, 403) else MetadataFetchError
            raise error_class(
                f"HTTP error {status_code} for URL: {url}", url=url, status_code=status_code
            ) from e
        except requests.exceptions.JSONDecodeError as e:
            logger.error(f"Invalid JSON response from URL {url}: {e}")
            raise MetadataFetchError(f"Invalid JSON response from URL {url}: {e}", url=url) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error for URL {url}: {e}", exc_info=True)
            raise MetadataFetchError(f"Request error for URL {url}: {e}", url=url) from e

        if not isinstance(payload, dict) or "data" not in payload:
            raise MetadataFetchError(f"Unexpected response shape from URL: {url}", url=url)

        return payload["data"]

    def fetch_collections(self, include_system: bool = False) -> dict[str, CollectionDescriptor]:
        """Fetch every collection together with its fields.

        Args:
            include_system: Keep ``directus_*`` system collections.

        Returns:
            Ordered mapping of collection key to descriptor.

        Raises:
            MetadataFetchError: If either request fails or returns malformed metadata.
        """
        raw_collections = self.get("/collections")
        raw_fields = self.get("/fields")

        if not isinstance(raw_collections, list) or not isinstance(raw_fields, list):
            logger.error(f"Collections and fields from {self.base_url} are not lists")
            raise MetadataFetchError(
                f"Expected lists of collections and fields from {self.base_url}",
                url=self.base_url,
            )

        logger.info(
            f"Fetched {len(raw_collections)} collections and {len(raw_fields)} fields "
            f"from {self.base_url}"
        )

        try:
            return build_collections(raw_collections, raw_fields, include_system=include_system)
        except (KeyError, TypeError, AttributeError) as e:
            logger.error(f"Malformed metadata from {self.base_url}: {e!r}")
            raise MetadataFetchError(
                f"Malformed metadata from {self.base_url}: {e!r}", url=self.base_url
            ) from e

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "DirectusClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
