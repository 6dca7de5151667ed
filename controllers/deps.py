from fastapi import Header


def get_user_id(x_user_id: str = Header(..., alias="X-User-Id", min_length=1, max_length=64)) -> str:
    """
    Caller identity. Authentication happens upstream; we only key settings by it.
    """
    return x_user_id
