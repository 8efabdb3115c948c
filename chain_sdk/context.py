"""
Context - HTTP request layer shared by every Chain SDK operation.
"""
import logging
import urllib.parse
from typing import Any, List, Optional, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from pydantic import TypeAdapter, ValidationError

from .config import ClientConfig, DEFAULT_URL, DEFAULT_TIMEOUT, DEFAULT_RETRY_COUNT
from .exceptions import APIError, BadURLError, ConnectivityError, HTTPError, JSONError
from .version import __version__

REQUEST_ID_HEADER = "Chain-Request-Id"
LOCAL_HOSTS = ("localhost", "127.0.0.1")


class Context:
    """
    Connection to a Chain Core server.

    The context owns the HTTP session and turns every transport or server
    failure into a ChainError subclass. All resource modules go through
    ``request`` or ``singleton_batch_request``; none of them talk HTTP directly.

    Example:
        >>> ctx = Context("http://localhost:1999")
        >>> template = Builder().add_action(Issue(asset_alias="gold", amount=100)).build(ctx)
    """

    def __init__(
        self,
        url: str = DEFAULT_URL,
        timeout: int = DEFAULT_TIMEOUT,
        retry_count: int = DEFAULT_RETRY_COUNT,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
        user_agent: Optional[str] = None,
        allow_insecure: bool = False
    ):
        """
        Initialize the Context

        Args:
            url: Base URL of the Chain Core API (e.g., "http://localhost:1999")
            timeout: Timeout for HTTP requests in seconds
            retry_count: Transport retries for connection errors and 502/503/504
                responses; 0 means every failure surfaces immediately
            session: Pre-configured requests session (the retry policy is not
                mounted on a session supplied by the caller)
            logger: Optional logger instance to use for debug/error logging
            user_agent: Override for the User-Agent header
            allow_insecure: Permit plain http:// to hosts other than localhost

        Raises:
            BadURLError: If the URL is malformed or uses http:// for a remote host
        """
        self.url = self._validate_url(url, allow_insecure)
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)
        self.user_agent = user_agent or f"chain-sdk-python/{__version__}"

        if session is None:
            session = requests.Session()
            retries = Retry(
                total=retry_count,
                connect=retry_count,
                read=retry_count,
                backoff_factor=0.5,
                status_forcelist=[502, 503, 504],
                allowed_methods=["POST"],
                raise_on_status=False
            )
            session.mount("http://", HTTPAdapter(max_retries=retries))
            session.mount("https://", HTTPAdapter(max_retries=retries))
        self.session = session

    @classmethod
    def from_config(cls, config: ClientConfig, **kwargs) -> "Context":
        """Create a Context from a ClientConfig."""
        return cls(
            url=config.url,
            timeout=config.timeout,
            retry_count=config.retry_count,
            user_agent=config.user_agent,
            **kwargs
        )

    @staticmethod
    def _validate_url(url: str, allow_insecure: bool) -> str:
        parsed = urllib.parse.urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise BadURLError(f"Invalid Chain Core URL: {url!r}")
        is_local = parsed.hostname in LOCAL_HOSTS
        if parsed.scheme != "https" and not is_local and not allow_insecure:
            raise BadURLError(f"url must use https:// for remote hosts (got: {parsed.scheme}://)")
        return url.rstrip("/")

    def request(self, endpoint: str, body: Any, response_type: Any = None) -> Any:
        """
        POST a JSON body to an endpoint and decode the response.

        Args:
            endpoint: Endpoint name, e.g. "list-transactions"
            body: JSON-serializable request body
            response_type: Pydantic model or type understood by
                pydantic.TypeAdapter (e.g. List[Template]); None returns raw JSON

        Returns:
            Response decoded as response_type

        Raises:
            APIError: If the server answers with an error object
            ConnectivityError: If the server cannot be reached
            HTTPError: For other transport failures
            JSONError: If the response is not JSON or has the wrong shape
        """
        data, request_id = self._post(endpoint, body)
        return self._decode(data, response_type, endpoint, request_id)

    def singleton_batch_request(self, endpoint: str, body: Any, response_type: Any) -> Any:
        """
        Send one item to a batch endpoint and unwrap the sole result.

        Args:
            endpoint: Batch endpoint name, e.g. "build-transaction"
            body: JSON-serializable item
            response_type: Type of a single result item

        Returns:
            The decoded result item

        Raises:
            APIError: If the item came back as an error entry
            JSONError: If the response is not a one-element list
        """
        data, request_id = self._post(endpoint, [body])
        if not isinstance(data, list) or len(data) != 1:
            raise JSONError(f"Expected a single-item batch response from {endpoint}, got: {data!r}", request_id)

        item = data[0]
        if isinstance(item, dict) and item.get("code") is not None:
            self.logger.error(f"Batch item failed on {endpoint}: {item.get('code')} {item.get('message')}")
            raise APIError(
                code=item["code"],
                message=item.get("message"),
                detail=item.get("detail"),
                data=item.get("data"),
                temporary=bool(item.get("temporary", False)),
                request_id=request_id
            )
        return self._decode(item, response_type, endpoint, request_id)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def __enter__(self) -> "Context":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _headers(self) -> dict:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": self.user_agent,
        }

    def _post(self, endpoint: str, body: Any) -> Tuple[Any, Optional[str]]:
        url = f"{self.url}/{endpoint}"
        self.logger.debug(f"POST {endpoint}: {body}")

        try:
            response = self.session.post(
                url,
                json=body,
                headers=self._headers(),
                timeout=self.timeout
            )
        except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema,
                requests.exceptions.InvalidSchema) as e:
            raise BadURLError(f"Invalid request URL {url}: {e}") from e
        except (requests.ConnectionError, requests.Timeout) as e:
            self.logger.error(f"Could not reach Chain Core at {url}: {e}")
            raise ConnectivityError(f"Could not reach Chain Core: {e}") from e
        except requests.RequestException as e:
            self.logger.error(f"Request to {url} failed: {e}")
            raise HTTPError(f"Request to {endpoint} failed: {e}") from e

        request_id = response.headers.get(REQUEST_ID_HEADER)
        if response.status_code >= 400:
            raise self._error_from_response(endpoint, response, request_id)

        try:
            data = response.json()
        except ValueError as e:
            self.logger.error(f"Invalid JSON response from {endpoint}: {e}")
            raise JSONError(f"Invalid JSON response from {endpoint}: {e}", request_id) from e

        self.logger.debug(f"Response from {endpoint} (request id {request_id}): {data}")
        return data, request_id

    def _error_from_response(
        self,
        endpoint: str,
        response: requests.Response,
        request_id: Optional[str]
    ) -> Exception:
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict) and body.get("code") is not None:
            self.logger.error(f"API error from {endpoint}: {body.get('code')} {body.get('message')}")
            return APIError(
                code=body["code"],
                message=body.get("message"),
                detail=body.get("detail"),
                data=body.get("data"),
                temporary=bool(body.get("temporary", False)),
                request_id=request_id,
                status_code=response.status_code
            )

        self.logger.error(f"HTTP {response.status_code} from {endpoint}")
        return HTTPError(
            f"HTTP {response.status_code} from {endpoint}: {response.text[:200]}",
            status_code=response.status_code
        )

    def _decode(self, data: Any, response_type: Any, endpoint: str, request_id: Optional[str]) -> Any:
        if response_type is None:
            return data
        try:
            return TypeAdapter(response_type).validate_python(data)
        except ValidationError as e:
            self.logger.error(f"Unexpected response shape from {endpoint}: {e}")
            raise JSONError(f"Unexpected response shape from {endpoint}: {e}", request_id) from e


def batch_payloads(items: List[Any]) -> List[Any]:
    """Convert a list of SDK objects to their wire payloads."""
    return [item.to_payload() for item in items]
