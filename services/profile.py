from typing import Any, Mapping

from schemas.settings import IncompleteProfile, ProfileState, SenderProfile

# field -> message shown next to the form control
REQUIRED_FIELDS = {
    "api_key": "API Key is required",
    "company_name": "Company Name is required",
    "trading_name": "Trading Name is required",
    "registration_number": "Registration Number is required",
    "address": "Address is required",
}


def validate_profile(partial: Mapping[str, Any]) -> ProfileState:
    """
    Turn a partial settings map into a SenderProfile, or report what is missing.
    Blank (whitespace-only) values count as missing.
    """
    errors: dict[str, str] = {}
    for field, message in REQUIRED_FIELDS.items():
        value = partial.get(field)
        if not isinstance(value, str) or not value.strip():
            errors[field] = message

    if errors:
        return IncompleteProfile(errors=errors)

    return SenderProfile(**{field: partial[field] for field in REQUIRED_FIELDS})
