"""Change request endpoints."""

from fastapi import APIRouter, status

from snowadapter.api.calls import call_adapter
from snowadapter.api.dependencies import AdapterDep
from snowadapter.api.exceptions import EmptyResultError
from snowadapter.api.models import (
    APIResponse,
    ChangeRequestResponse,
    change_request_to_response,
)

router = APIRouter(prefix="/records", tags=["records"])


@router.get("", response_model=APIResponse[list[ChangeRequestResponse]])
async def get_records(adapter: AdapterDep) -> APIResponse[list[ChangeRequestResponse]]:
    """Fetch change requests from ServiceNow."""
    records, error = await call_adapter(adapter.get_record)
    if error:
        raise error
    if records is None:
        raise EmptyResultError("Unparseable response from ServiceNow")
    return APIResponse(data=[change_request_to_response(r) for r in records])


@router.post(
    "",
    response_model=APIResponse[ChangeRequestResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_record(adapter: AdapterDep) -> APIResponse[ChangeRequestResponse]:
    """Create the example change request in ServiceNow."""
    record, error = await call_adapter(adapter.post_record)
    if error:
        raise error
    if record is None:
        raise EmptyResultError("Unparseable response from ServiceNow")
    return APIResponse(data=change_request_to_response(record))
