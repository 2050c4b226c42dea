"""
Installation API Routes

DC installation records, file downloads and share links.
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from dctrack.api.error import ClientError, ServerError
from dctrack.app.services.file_storage import IFileStorage
from dctrack.app.services.unit_of_work import UnitOfWork
from dctrack.app.use_cases.installations import (
    CreateInstallationUseCase,
    DeleteInstallationResponse,
    DeleteInstallationUseCase,
    DownloadInstallationFilesUseCase,
    DownloadResponse,
    GetInstallationUseCase,
    GetSharedInstallationUseCase,
    InstallationCommand,
    InstallationListResponse,
    InstallationResponse,
    ListInstallationsUseCase,
    ShareInstallationUseCase,
    ShareLinkResponse,
    UpdateInstallationUseCase,
    UploadInstallationFileUseCase,
    parse_installation_filters,
)
from dctrack.depends import get_audit_context, get_file_storage, get_unit_of_work
from dctrack.domain.context import AuditContext
from dctrack.libs.result import Error

router = APIRouter(prefix="/installations", tags=["Installations"])


def _raise_installation_error(error: Error):
    if error.code == "INSUFFICIENT_ROLE":
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    if error.code in ("INSTALLATION_NOT_FOUND", "FILE_NOT_FOUND"):
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    if error.code == "SR_NO_ALREADY_EXISTS":
        raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
    if error.code in ("INVALID_FILE_TYPE", "INVALID_FILE_EXTENSION", "EMPTY_FILE"):
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    if error.code == "FILE_TOO_LARGE":
        raise ClientError(error, status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE)
    if error.code == "INVALID_SHARE_TOKEN":
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    raise ServerError(error)


@router.get("", status_code=status.HTTP_200_OK, response_model=InstallationListResponse)
async def list_installations(
    context: AuditContext = Depends(get_audit_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: IFileStorage = Depends(get_file_storage),
    delivery_status: Optional[str] = Query(None, description="Delivery status or 'all'"),
    installation_status: Optional[str] = Query(None, description="Installation status or 'all'"),
    priority: Optional[str] = Query(None, description="Priority or 'all'"),
    search: Optional[str] = Query(None, description="Matches sr_no, receiver, region, district, tahsil"),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of records to return"),
    offset: int = Query(0, ge=0),
):
    """
    List Installations

    Any signed-in role. Soft-deleted records are hidden.
    """
    filters = parse_installation_filters(
        delivery_status, installation_status, priority, search
    )
    result = await ListInstallationsUseCase(uow, storage).execute(
        context, filters, limit=limit, offset=offset
    )
    if result.is_err():
        _raise_installation_error(result.error)
    return result.value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=InstallationResponse)
async def create_installation(
    command: InstallationCommand,
    context: AuditContext = Depends(get_audit_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: IFileStorage = Depends(get_file_storage),
):
    """
    Create Installation (Admin only)

    sr_no is generated when omitted.

    Raises:
        - 403 Forbidden: Caller is not an Admin
        - 409 Conflict: sr_no already taken
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
    """
    result = await CreateInstallationUseCase(uow, storage).execute(context, command)
    if result.is_err():
        _raise_installation_error(result.error)
    return result.value


@router.get(
    "/shared/{token}", status_code=status.HTTP_200_OK, response_model=InstallationResponse
)
async def get_shared_installation(
    token: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: IFileStorage = Depends(get_file_storage),
):
    """
    Open Shared Installation

    No sign-in required; the share token grants read access.

    Raises:
        - 403 Forbidden: Token invalid or expired
        - 404 Not Found: Installation deleted
    """
    result = await GetSharedInstallationUseCase(uow, storage).execute(token)
    if result.is_err():
        _raise_installation_error(result.error)
    return result.value


@router.get(
    "/{installation_id}", status_code=status.HTTP_200_OK, response_model=InstallationResponse
)
async def get_installation(
    installation_id: int,
    context: AuditContext = Depends(get_audit_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: IFileStorage = Depends(get_file_storage),
):
    """
    View Installation

    Any signed-in role. The view is recorded in the audit trail.
    """
    result = await GetInstallationUseCase(uow, storage).execute(context, installation_id)
    if result.is_err():
        _raise_installation_error(result.error)
    return result.value


@router.put(
    "/{installation_id}", status_code=status.HTTP_200_OK, response_model=InstallationResponse
)
async def update_installation(
    installation_id: int,
    command: InstallationCommand,
    context: AuditContext = Depends(get_audit_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: IFileStorage = Depends(get_file_storage),
):
    """
    Update Installation (Admin or Client)

    Raises:
        - 403 Forbidden: Caller is neither Admin nor Client
        - 404 Not Found: Unknown or deleted installation
        - 409 Conflict: sr_no already taken
    """
    result = await UpdateInstallationUseCase(uow, storage).execute(
        context, installation_id, command
    )
    if result.is_err():
        _raise_installation_error(result.error)
    return result.value


@router.delete(
    "/{installation_id}",
    status_code=status.HTTP_200_OK,
    response_model=DeleteInstallationResponse,
)
async def delete_installation(
    installation_id: int,
    context: AuditContext = Depends(get_audit_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: IFileStorage = Depends(get_file_storage),
):
    """
    Delete Installation (Admin only)

    Soft-deletes the record and removes its attached files.
    """
    result = await DeleteInstallationUseCase(uow, storage).execute(
        context, installation_id
    )
    if result.is_err():
        _raise_installation_error(result.error)
    return result.value


@router.post(
    "/{installation_id}/files/{file_type}",
    status_code=status.HTTP_200_OK,
    response_model=InstallationResponse,
)
async def upload_installation_file(
    installation_id: int,
    file_type: str,
    file: UploadFile = File(..., description="Attachment to store"),
    context: AuditContext = Depends(get_audit_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: IFileStorage = Depends(get_file_storage),
):
    """
    Upload Installation File (Admin or Client)

    file_type is an attachment field (e.g. delivery_report_file), which
    replaces its current file, or additional_documents, which appends.

    Raises:
        - 400 Bad Request: Unknown file type, rejected extension or empty file
        - 403 Forbidden: Caller is neither Admin nor Client
        - 404 Not Found: Unknown or deleted installation
        - 413 Request Entity Too Large: File over 10 MB
    """
    content = await file.read()
    result = await UploadInstallationFileUseCase(uow, storage).execute(
        context, installation_id, file_type, file.filename or "", content
    )
    if result.is_err():
        _raise_installation_error(result.error)
    return result.value


class DownloadRequest(BaseModel):
    """Download HTTP request payload"""

    file_type: Optional[str] = Field(
        None, description="Attachment field (e.g. delivery_report_file); omit for all files"
    )


@router.post(
    "/{installation_id}/download",
    status_code=status.HTTP_200_OK,
    response_model=DownloadResponse,
)
async def download_installation_files(
    installation_id: int,
    request: DownloadRequest,
    context: AuditContext = Depends(get_audit_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: IFileStorage = Depends(get_file_storage),
):
    """
    Download Installation Files

    Any signed-in role. Returns download URLs and records the download.

    Raises:
        - 400 Bad Request: Unknown file type
        - 404 Not Found: Installation or file missing
    """
    result = await DownloadInstallationFilesUseCase(uow, storage).execute(
        context, installation_id, request.file_type
    )
    if result.is_err():
        _raise_installation_error(result.error)
    return result.value


@router.post(
    "/{installation_id}/share",
    status_code=status.HTTP_200_OK,
    response_model=ShareLinkResponse,
)
async def share_installation(
    installation_id: int,
    context: AuditContext = Depends(get_audit_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Generate Shareable Link (Admin or Client)

    Raises:
        - 403 Forbidden: Caller is neither Admin nor Client
        - 404 Not Found: Unknown or deleted installation
    """
    result = await ShareInstallationUseCase(uow).execute(
        context,
        installation_id,
        base_url=ApplicationConfig.APP_URL,
        link_hours=ApplicationConfig.SHARE_LINK_HOURS,
    )
    if result.is_err():
        _raise_installation_error(result.error)
    return result.value
