from sqlalchemy.orm import Session

from models.user_settings import UserSettings
from schemas.settings import ProfileState, SenderProfile
from services.api_key import normalize_api_key, strip_api_key_prefix
from services.profile import validate_profile


def get_user_settings(db: Session, user_id: str) -> UserSettings | None:
    return db.query(UserSettings).filter(UserSettings.user_id == user_id).first()


def upsert_user_settings(db: Session, *, user_id: str, profile: SenderProfile) -> UserSettings:
    try:
        row = get_user_settings(db, user_id)
        if not row:
            row = UserSettings(user_id=user_id)
            db.add(row)

        # strip first so a pasted "Key abc" is never stored as "Key Key abc"
        row.takealot_api_key = normalize_api_key(strip_api_key_prefix(profile.api_key))
        row.company_name = profile.company_name
        row.trading_name = profile.trading_name
        row.registration_number = profile.registration_number
        row.address = profile.address

        db.commit()
        db.refresh(row)
        return row

    except Exception:
        db.rollback()
        raise


def profile_from_row(row: UserSettings | None) -> ProfileState:
    if row is None:
        return validate_profile({})
    return validate_profile(
        {
            "api_key": row.takealot_api_key,
            "company_name": row.company_name,
            "trading_name": row.trading_name,
            "registration_number": row.registration_number,
            "address": row.address,
        }
    )
