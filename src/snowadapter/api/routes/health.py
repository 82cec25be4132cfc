"""Healthcheck endpoint."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from snowadapter.adapter import AdapterStatus
from snowadapter.api.calls import call_adapter
from snowadapter.api.dependencies import AdapterDep
from snowadapter.api.models import APIResponse, HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=APIResponse[HealthResponse])
async def healthcheck(adapter: AdapterDep) -> JSONResponse:
    """Run a healthcheck against ServiceNow.

    Returns 503 when the instance is OFFLINE.
    """
    _, error = await call_adapter(adapter.healthcheck)

    # adapter.status is shared by concurrent checks; report this call's outcome
    current = AdapterStatus.OFFLINE if error else AdapterStatus.ONLINE
    body = APIResponse[HealthResponse](
        data=HealthResponse(id=adapter.id, status=current.value),
        error=str(error) if error else None,
    )
    if current is AdapterStatus.ONLINE:
        code = status.HTTP_200_OK
    else:
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=code, content=body.model_dump())
