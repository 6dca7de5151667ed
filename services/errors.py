class FetchError(Exception):
    """A read against the Takealot API failed (transport or non-2xx). Message is user-facing."""


class UploadError(Exception):
    """Uploading a rendered invoice failed. `reason` is safe to show to the user."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason
