from typing import Dict, Optional, Union

from pydantic import BaseModel


class SettingsIn(BaseModel):
    """Partial settings as edited by the user; every field may still be missing."""
    api_key: Optional[str] = None
    company_name: Optional[str] = None
    trading_name: Optional[str] = None
    registration_number: Optional[str] = None
    address: Optional[str] = None


class SettingsOut(SettingsIn):
    user_id: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class SenderProfile(BaseModel):
    """Complete letterhead + credential. Only produced by validate_profile()."""
    api_key: str
    company_name: str
    trading_name: str
    registration_number: str
    address: str


class IncompleteProfile(BaseModel):
    errors: Dict[str, str]


ProfileState = Union[IncompleteProfile, SenderProfile]
