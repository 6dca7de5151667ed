from datetime import timedelta, timezone

from fastapi import APIRouter, Depends, HTTPException, Path
from fastapi.responses import Response
from sqlalchemy.orm import Session

from controllers.deps import get_user_id
from core.config import settings
from core.logger import log
from db.session import get_db
from queries.user_settings import get_user_settings, profile_from_row
from schemas.invoice import InvoiceData, InvoiceRequestList, NoteIn, RequestStatus, UploadOut
from schemas.responses import ApiResponse
from schemas.settings import IncompleteProfile, SenderProfile
from services.errors import FetchError, UploadError
from services.pdf_builder import RenderedDocument, build_invoice_pdf, save_document
from services.takealot_client import TakealotClient
from services.uploader import UploadSubmitter, upload_filename

router = APIRouter(prefix="/invoices", tags=["invoices"])

_client = TakealotClient()
_uploader = UploadSubmitter()

API_KEY_MISSING = "Please set your Takealot API key in settings first"


def _api_key_for(db: Session, user_id: str) -> str:
    row = get_user_settings(db, user_id)
    if not row or not row.takealot_api_key:
        raise HTTPException(status_code=400, detail=API_KEY_MISSING)
    return row.takealot_api_key


def _profile_for(db: Session, user_id: str) -> SenderProfile:
    state = profile_from_row(get_user_settings(db, user_id))
    if isinstance(state, IncompleteProfile):
        raise HTTPException(
            status_code=409,
            detail={"message": "Complete your settings before generating invoices", "errors": state.errors},
        )
    return state


async def _render(invoice_number: str, note: str, profile: SenderProfile) -> RenderedDocument:
    try:
        invoice = await _client.fetch_invoice(invoice_number, profile.api_key)
    except FetchError as e:
        raise HTTPException(status_code=502, detail=str(e))

    document = build_invoice_pdf(
        invoice,
        note,
        profile,
        tz=timezone(timedelta(hours=settings.INVOICE_UTC_OFFSET_HOURS)),
        date_format=settings.INVOICE_DATE_FORMAT,
    )

    if settings.PDF_SAVE_DIR:
        try:
            save_document(document, settings.PDF_SAVE_DIR)
        except OSError as e:
            # the caller still gets the bytes; a full disk must not break the download
            log.exception("could not save %s: %s", document.filename, e)

    return document


@router.get("/requests/{status}", response_model=ApiResponse[InvoiceRequestList])
async def list_invoice_requests(
    status: RequestStatus,
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
):
    """
    First page (100 rows) of open/closed invoice requests + the remote total.
    """
    api_key = _api_key_for(db, user_id)
    try:
        result = await _client.fetch_invoice_requests(status, api_key)
    except FetchError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return ApiResponse(data=result)


@router.get("/{invoice_number}", response_model=ApiResponse[InvoiceData])
async def get_invoice(
    invoice_number: str = Path(..., min_length=1, max_length=32, pattern=r"^[0-9]+$"),
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
):
    api_key = _api_key_for(db, user_id)
    try:
        invoice = await _client.fetch_invoice(invoice_number, api_key)
    except FetchError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return ApiResponse(data=invoice)


@router.post("/{invoice_number}/pdf")
async def download_invoice_pdf(
    body: NoteIn,
    invoice_number: str = Path(..., min_length=1, max_length=32, pattern=r"^[0-9]+$"),
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
):
    """
    Fetch + render. Returned as an attachment named invoice-<order>-<customer>.pdf.
    """
    profile = _profile_for(db, user_id)
    document = await _render(invoice_number, body.note, profile)
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={"Content-Disposition": f'attachment; filename="{document.filename}"'},
    )


@router.post("/{request_id}/upload", response_model=ApiResponse[UploadOut])
async def upload_invoice_pdf(
    body: NoteIn,
    request_id: int = Path(..., ge=1),
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
):
    """
    Always re-renders right before uploading, so the upload carries the current note.
    """
    profile = _profile_for(db, user_id)
    document = await _render(str(request_id), body.note, profile)

    try:
        await _uploader.upload(request_id, document.content, profile.api_key)
    except UploadError as e:
        raise HTTPException(status_code=502, detail=e.reason)

    return ApiResponse(data=UploadOut(request_id=request_id, filename=upload_filename(request_id)))
