import re

KEY_PREFIX = "Key "

# "Key abc", "key abc", and a bare "Key" all count as prefixed
_PREFIX_RE = re.compile(r"^Key(\s+|$)", re.IGNORECASE)


def normalize_api_key(api_key: str) -> str:
    """
    Takealot expects `Authorization: Key <token>`.
    Idempotent: an already prefixed key is returned unchanged.
    """
    return api_key if api_key.startswith(KEY_PREFIX) else f"{KEY_PREFIX}{api_key}"


def strip_api_key_prefix(api_key: str | None) -> str:
    return _PREFIX_RE.sub("", api_key or "")
