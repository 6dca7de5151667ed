import logging

import httpx

from services.errors import UploadError
from services.relay import RelayConfig, upload_headers

log = logging.getLogger("takealot.upload")

GENERIC_UPLOAD_FAILURE = "Failed to upload PDF"


def upload_filename(request_id: int) -> str:
    return f"invoice-{request_id}.pdf"


class UploadSubmitter:
    """
    POSTs a rendered invoice PDF to
    /sales/customer_invoice_request/{request_id}/upload as multipart field `invoice`.
    """

    def __init__(
        self,
        config: RelayConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or RelayConfig.from_settings()
        self._transport = transport

    async def upload(self, request_id: int, pdf_bytes: bytes | None, api_key: str | None) -> None:
        # preconditions are checked before any network traffic
        if not pdf_bytes:
            raise UploadError("No PDF available to upload")
        if not api_key:
            raise UploadError("Takealot API key not found")

        url = self.config.url(f"sales/customer_invoice_request/{request_id}/upload")
        files = {"invoice": (upload_filename(request_id), bytes(pdf_bytes), "application/pdf")}

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                r = await client.post(
                    url,
                    headers=upload_headers(api_key, self.config.relay_key),
                    files=files,
                )
        except httpx.HTTPError as e:
            log.exception("upload for request %s failed: %s", request_id, e)
            raise UploadError(GENERIC_UPLOAD_FAILURE) from e

        if not r.is_success:
            reason = _error_message(r) or GENERIC_UPLOAD_FAILURE
            log.error("upload for request %s rejected (HTTP %s): %s", request_id, r.status_code, reason)
            raise UploadError(reason)

        log.info("uploaded %s (%d bytes)", upload_filename(request_id), len(pdf_bytes))


def _error_message(r: httpx.Response) -> str | None:
    """Takealot error bodies look like {"message": "..."}; anything else yields None."""
    try:
        payload = r.json()
    except ValueError:
        return None
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return None
