from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from controllers.deps import get_user_id
from core.logger import log
from db.session import get_db
from models.user_settings import UserSettings
from queries.user_settings import get_user_settings, upsert_user_settings
from schemas.responses import ApiResponse
from schemas.settings import IncompleteProfile, SettingsIn, SettingsOut
from services.api_key import strip_api_key_prefix
from services.profile import validate_profile

router = APIRouter(prefix="/settings", tags=["settings"])


def _to_out(row: UserSettings) -> SettingsOut:
    # the stored key carries the "Key " prefix; the form shows the bare token
    return SettingsOut(
        user_id=row.user_id,
        api_key=strip_api_key_prefix(row.takealot_api_key),
        company_name=row.company_name,
        trading_name=row.trading_name,
        registration_number=row.registration_number,
        address=row.address,
        created_at=row.created_at.isoformat() if row.created_at else None,
        updated_at=row.updated_at.isoformat() if row.updated_at else None,
    )


@router.get("", response_model=ApiResponse[SettingsOut])
def read_settings(user_id: str = Depends(get_user_id), db: Session = Depends(get_db)):
    row = get_user_settings(db, user_id)
    if not row:
        return JSONResponse(
            status_code=404,
            content=ApiResponse[SettingsOut](error="No settings saved yet").model_dump(),
        )
    return ApiResponse(data=_to_out(row))


@router.put("", response_model=ApiResponse[SettingsOut])
def save_settings(
    body: SettingsIn,
    user_id: str = Depends(get_user_id),
    db: Session = Depends(get_db),
):
    """
    Validate the whole form, then upsert by user id.
    Missing fields -> 422 with one message per field (nothing is saved).
    """
    partial = body.model_dump()
    partial["api_key"] = strip_api_key_prefix(partial.get("api_key"))

    state = validate_profile(partial)
    if isinstance(state, IncompleteProfile):
        return JSONResponse(
            status_code=422,
            content=ApiResponse[SettingsOut](error="Invalid settings", errors=state.errors).model_dump(),
        )

    try:
        row = upsert_user_settings(db, user_id=user_id, profile=state)
    except Exception as e:
        log.exception("saving settings for %s failed: %s", user_id, e)
        return JSONResponse(
            status_code=500,
            content=ApiResponse[SettingsOut](error="Failed to save settings").model_dump(),
        )

    return ApiResponse(data=_to_out(row))
