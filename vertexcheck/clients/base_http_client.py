# clients/base_http_client.py
import httpx

from typing import Dict, Any, Optional
from urllib.parse import urljoin
from abc import ABC
from vertexcheck.utils.log import app_logger, sanitize

class BaseHTTPClient(ABC):
    """Base async HTTP client with common functionalities like GET, POST and error logging.

    One instance wraps one `httpx.AsyncClient`; use it as an async context
    manager so the connection pool is closed when the call is done.
    There is no retry loop: every request is attempted exactly once.
    """

    def __init__(self,
                 base_url: str,
                 api_key: Optional[str] = None,
                 timeout: Optional[float] = None,
                 content_type: Optional[str] = 'application/json',
                 accept: Optional[str] = 'application/json',
                 transport: Optional[httpx.AsyncBaseTransport] = None
                 ):
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key
        self.timeout = timeout
        self.content_type = content_type
        self.accept = accept
        self.headers: Dict[str, str] = {}

        client_kwargs: Dict[str, Any] = {}
        # only override httpx's default timeout when one is configured
        if timeout is not None:
            client_kwargs['timeout'] = timeout
        if transport is not None:
            client_kwargs['transport'] = transport
        self.session = httpx.AsyncClient(**client_kwargs)

        # setup default headers
        self._setup_default_headers()

    def _setup_default_headers(self):
        """setup default headers for the client"""
        self.headers.update({
            'Accept': self.accept,
            'Content-Type': self.content_type,
        })

        # add authentication header if api_key is provided
        if self.api_key:
            self._setup_authentication()

    def _setup_authentication(self):
        """setup authentication with API key (can be overridden)"""
        pass

    def _build_url(self, endpoint: str) -> str:
        """build full URL"""
        return urljoin(f"{self.base_url}/", endpoint.lstrip('/'))

    async def _make_request(self, method: str, endpoint: str,
                            data: Optional[Dict] = None) -> httpx.Response:
        """do a single HTTP request and hand back the raw response.

        Status codes are not checked here; callers decide what a failure means.
        Transport errors are logged and re-raised untouched.
        """
        url = self._build_url(endpoint)

        try:
            response = await self.session.request(
                method=method,
                url=url,
                json=data,
                headers=self.headers,
            )
        except httpx.HTTPError as e:
            app_logger.error("request.failed", method=method, url=url, exc_type=type(e).__name__, error=sanitize(e))
            raise

        # debug log for non-success status codes
        if response.status_code >= 400:
            app_logger.debug("request.status", method=method, url=url, status_code=response.status_code)

        return response

    async def get(self, endpoint: str) -> httpx.Response:
        """do GET request"""
        return await self._make_request('GET', endpoint)

    async def post(self, endpoint: str, data: Optional[Dict] = None) -> httpx.Response:
        """do POST request"""
        return await self._make_request('POST', endpoint, data=data)

    async def close(self):
        """close HTTP session"""
        await self.session.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
        return False
