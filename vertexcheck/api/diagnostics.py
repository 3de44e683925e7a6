from fastapi import APIRouter, Depends, HTTPException, status

from vertexcheck.core.exceptions.exceptions import MissingSettingError
from vertexcheck.services.diagnostic_probe import DiagnosticProbe, resolve_target
from vertexcheck.utils.log import app_logger
from vertexcheck.schemas.probe import DiagnosticsReport, ProbeRequest, ProbeResult

router = APIRouter(prefix="/diagnostics", tags=["Diagnostics"])


def get_probe() -> DiagnosticProbe:
    return DiagnosticProbe()


def _resolve(request: ProbeRequest) -> dict:
    try:
        return resolve_target(
            project=request.project,
            location=request.location,
            token=request.token,
            model_id=request.model_id,
        )
    except MissingSettingError as e:
        app_logger.warning("api.diagnostics.missing_value", field=e.name)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        )


@router.post(
    "/connect",
    response_model=ProbeResult,
    summary="Check project, location and token",
    description="Lists the publisher models of the project/location. "
                "A failed check is still reported with HTTP 200 and `success: false`.",
    responses={
        400: {"description": "Project, location or token could not be resolved"},
    },
)
async def connect(request: ProbeRequest, probe: DiagnosticProbe = Depends(get_probe)) -> ProbeResult:
    target = _resolve(request)
    return await probe.connect(target["project"], target["location"], target["token"])


@router.post(
    "/generate",
    response_model=ProbeResult,
    summary="Run a one word generation",
    description="Sends a fixed prompt to the model and checks that text comes back.",
    responses={
        400: {"description": "Project, location or token could not be resolved"},
    },
)
async def generate(request: ProbeRequest, probe: DiagnosticProbe = Depends(get_probe)) -> ProbeResult:
    target = _resolve(request)
    return await probe.generate(target["project"], target["location"], target["token"], target["model_id"])


@router.post(
    "/run",
    response_model=DiagnosticsReport,
    summary="Run both checks",
)
async def run_all(request: ProbeRequest, probe: DiagnosticProbe = Depends(get_probe)) -> DiagnosticsReport:
    """Run the connectivity check, then the generation check.

    Returns:
        DiagnosticsReport with one ProbeResult per check

    Raises:
        HTTPException: 400 if a required value is missing from both body and settings
    """
    target = _resolve(request)
    results = await probe.run_all(**target)
    app_logger.info("api.diagnostics.run", connect=results["connect"].success, generate=results["generate"].success)
    return DiagnosticsReport(**results)
