import asyncio
import json
import sys
from typing import Any, Dict, Optional

import httpx

from vertexcheck.clients.vertex_client import VertexClient
from vertexcheck.core.exceptions.exceptions import InvalidResponseError, MissingSettingError
from vertexcheck.schemas.probe import ConnectData, GenerateData, ProbeResult
from vertexcheck.utils.log import app_logger, sanitize
from vertexcheck.config.settings import settings, DEFAULT_MODEL_ID


CONNECT_OK_MESSAGE = "Conexión autorizada correctamente."
GENERATE_OK_MESSAGE = "Inferencia ejecutada exitosamente."
NO_TEXT_MESSAGE = "La respuesta no contiene texto válido."
NETWORK_ERROR_MESSAGE = (
    "Error de Red / CORS. Asegúrate de que el token es válido. "
    "Nota: Las llamadas directas desde navegador a Vertex pueden ser bloqueadas por CORS en algunas configuraciones."
)


def _dig(document: Any, *path) -> Any:
    """Walk `path` (dict keys / list indexes) into a loosely typed JSON document.

    Any missing or mistyped level yields None instead of raising.
    """
    current = document
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or len(current) <= key:
                return None
        elif not isinstance(current, dict):
            return None
        current = current[key] if isinstance(key, int) else current.get(key)
        if current is None:
            return None
    return current


def _error_text(e: Exception) -> str:
    # some httpx errors (timeouts mostly) carry an empty message
    return str(e) or type(e).__name__


class DiagnosticProbe:
    """Connectivity and generation checks against the Vertex AI REST API.

    Both checks perform exactly one request and always return a `ProbeResult`;
    nothing raises past them. No state is kept between calls.
    """

    def __init__(self,
                 api_host: Optional[str] = None,
                 timeout: Optional[float] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_host = api_host
        self.timeout = timeout
        # injectable transport, mostly for tests (httpx.MockTransport)
        self.transport = transport

    def _client(self, project: str, location: str, token: str) -> VertexClient:
        return VertexClient(
            project=project,
            location=location,
            token=token,
            api_host=self.api_host,
            timeout=self.timeout,
            transport=self.transport,
        )

    async def connect(self, project: str, location: str, token: str) -> ProbeResult:
        """List the publisher models to verify project, location and token."""
        app_logger.info("vertex.connect.start", project=project, location=location)
        try:
            async with self._client(project, location, token) as client:
                data = await client.list_models()

            models = _dig(data, "models")
            models_found = len(models) if isinstance(models, list) else 0
            sample = _dig(data, "models", 0, "name") or "N/A"

            app_logger.info("vertex.connect.success", project=project, location=location, models_found=models_found)
            return ProbeResult(
                success=True,
                message=CONNECT_OK_MESSAGE,
                data=ConnectData(models_found=models_found, sample=sample),
            )
        except httpx.TransportError as e:
            # connection never established (dns, refused, tls, timeout)
            app_logger.error("vertex.connect.network_error", project=project, location=location,
                             exc_type=type(e).__name__, error=sanitize(e))
            return ProbeResult(success=False, message=NETWORK_ERROR_MESSAGE)
        except Exception as e:
            app_logger.error("vertex.connect.failed", project=project, location=location,
                             exc_type=type(e).__name__, error=sanitize(e))
            return ProbeResult(success=False, message=_error_text(e))

    async def generate(self, project: str, location: str, token: str,
                       model_id: str = DEFAULT_MODEL_ID) -> ProbeResult:
        """Ask `model_id` for a fixed one word answer and check some text comes back."""
        app_logger.info("vertex.generate.start", project=project, location=location, model=model_id)
        try:
            async with self._client(project, location, token) as client:
                data = await client.generate_content(model_id)

            text = _dig(data, "candidates", 0, "content", "parts", 0, "text")
            if not text:
                raise InvalidResponseError(NO_TEXT_MESSAGE)

            app_logger.info("vertex.generate.success", project=project, location=location, model=model_id)
            return ProbeResult(
                success=True,
                message=GENERATE_OK_MESSAGE,
                data=GenerateData(output=text, model=model_id),
            )
        except Exception as e:
            app_logger.error("vertex.generate.failed", project=project, location=location, model=model_id,
                             exc_type=type(e).__name__, error=sanitize(e))
            return ProbeResult(success=False, message=_error_text(e))

    async def run_all(self, project: str, location: str, token: str,
                      model_id: str = DEFAULT_MODEL_ID) -> Dict[str, ProbeResult]:
        """Run both checks one after the other; generation runs even if listing failed."""
        connect_result = await self.connect(project, location, token)
        generate_result = await self.generate(project, location, token, model_id)
        app_logger.info("vertex.run_all.finished", project=project, location=location,
                        connect=connect_result.success, generate=generate_result.success)
        return {"connect": connect_result, "generate": generate_result}


def resolve_target(project: Optional[str] = None,
                   location: Optional[str] = None,
                   token: Optional[str] = None,
                   model_id: Optional[str] = None) -> Dict[str, str]:
    """Fill unset values from settings. Raises MissingSettingError."""
    resolved = {
        "project": project or settings.VERTEX_PROJECT_ID,
        "location": location or settings.VERTEX_LOCATION,
        "token": token or settings.VERTEX_ACCESS_TOKEN,
        "model_id": model_id or settings.VERTEX_MODEL_ID or DEFAULT_MODEL_ID,
    }
    for name, value in resolved.items():
        if not value:
            raise MissingSettingError(name)
    return resolved


if __name__ == "__main__":
    # quick runner for manual execution
    try:
        target = resolve_target()
    except MissingSettingError as e:
        print(e.message, file=sys.stderr)
        sys.exit(2)

    results = asyncio.run(DiagnosticProbe().run_all(**target))
    for name, result in results.items():
        print(f"{name}: {json.dumps(result.model_dump(by_alias=True), ensure_ascii=False)}")
    sys.exit(0 if all(r.success for r in results.values()) else 1)
