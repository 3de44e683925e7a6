from typing import Any, Dict, Optional

import httpx

from vertexcheck.clients.base_http_client import BaseHTTPClient
from vertexcheck.core.exceptions.exceptions import VertexAPIError
from vertexcheck.utils.log import app_logger
from vertexcheck.config.settings import settings


PROBE_PROMPT = "Responde solo con la palabra: VERTEX_OK"
PROBE_GENERATION_CONFIG = {
    "temperature": 0.2,
    "maxOutputTokens": 10,
}


class VertexClient(BaseHTTPClient):
    """Client for the regional Vertex AI REST endpoints of one project/location."""

    def __init__(self, project: str, location: str, token: str,
                 api_host: Optional[str] = None,
                 timeout: Optional[float] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.project = project
        self.location = location
        host = api_host or settings.VERTEX_API_HOST
        super().__init__(
            base_url=f"https://{location}-aiplatform.{host}",
            api_key=token,
            timeout=timeout if timeout is not None else settings.VERTEX_HTTP_TIMEOUT,
            transport=transport,
        )

    def _setup_authentication(self):
        self.headers["Authorization"] = f"Bearer {self.api_key}"

    @property
    def models_path(self) -> str:
        return f"/v1/projects/{self.project}/locations/{self.location}/publishers/google/models"

    async def list_models(self) -> Dict[str, Any]:
        """GET the publisher model listing.

        On a non-2xx answer the structured `error` body is used when present,
        otherwise the status line. Raises VertexAPIError.
        """
        response = await self.get(self.models_path)

        if not response.is_success:
            error_msg = f"HTTP {response.status_code}: {response.reason_phrase}"
            try:
                error_data = response.json()
            except ValueError:
                # non-json error body, keep the status line
                error_data = None
            error = error_data.get("error") if isinstance(error_data, dict) else None
            # only a full {code, message} object replaces the status line
            if isinstance(error, dict) and error.get("code") is not None and error.get("message") is not None:
                error_msg = f"{error['code']} - {error['message']}"
            app_logger.debug("vertex.list_models.http_error", status_code=response.status_code, reason=error_msg)
            raise VertexAPIError(error_msg, status_code=response.status_code)

        return response.json()

    async def generate_content(self, model_id: str, prompt: str = PROBE_PROMPT) -> Dict[str, Any]:
        """POST a single user message to `{model_id}:generateContent`.

        The error body of a non-2xx answer is not inspected. Raises VertexAPIError.
        """
        payload = {
            "contents": {
                "role": "user",
                "parts": [{"text": prompt}],
            },
            "generationConfig": dict(PROBE_GENERATION_CONFIG),
        }

        response = await self.post(f"{self.models_path}/{model_id}:generateContent", data=payload)

        if not response.is_success:
            app_logger.debug("vertex.generate_content.http_error", status_code=response.status_code, model=model_id)
            raise VertexAPIError(f"HTTP {response.status_code} Error en generación", status_code=response.status_code)

        return response.json()
