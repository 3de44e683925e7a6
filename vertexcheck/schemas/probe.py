from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field

from vertexcheck.config.settings import DEFAULT_MODEL_ID


class ProbeRequest(BaseModel):
    """Request body for the diagnostics endpoints.

    Empty fields fall back to the configured defaults (see `Settings`).
    """
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    project: Optional[str] = Field(None, description="Cloud project identifier")
    location: Optional[str] = Field(None, description="Region, e.g. us-central1")
    token: Optional[str] = Field(None, description="OAuth2 bearer token")
    model_id: Optional[str] = Field(None, alias="modelId", description="Model used by the generation check")


class ConnectData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    models_found: int = Field(..., alias="modelsFound")
    sample: str


class GenerateData(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    output: str
    model: str = DEFAULT_MODEL_ID


class ProbeResult(BaseModel):
    """Outcome of a single diagnostic check."""
    success: bool = Field(..., description="Whether the check passed")
    message: str = Field(..., description="Human-readable message")
    data: Optional[Union[ConnectData, GenerateData]] = None


class DiagnosticsReport(BaseModel):
    connect: ProbeResult
    generate: ProbeResult
