import logging

import httpx
from pydantic import ValidationError

from schemas.invoice import (
    InvoiceData,
    InvoiceRequestList,
    InvoiceRequestsPage,
    RequestStatus,
)
from services.errors import FetchError
from services.relay import RelayConfig, api_headers

log = logging.getLogger("takealot")

REQUESTS_PAGE_SIZE = 100


class TakealotClient:
    """
    Read side of the Takealot Seller API.
    No caching, no retries, httpx default timeout: a failure is logged and
    surfaced as FetchError with a generic message.
    """

    def __init__(
        self,
        config: RelayConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config or RelayConfig.from_settings()
        self._transport = transport

    async def fetch_invoice(self, invoice_number: str, api_key: str) -> InvoiceData:
        url = self.config.url(f"sales/customer_invoice_request/{invoice_number}")
        try:
            payload = await self._get_json(url, api_key)
            return InvoiceData.model_validate(payload)
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            log.exception("fetch_invoice %s failed: %s", invoice_number, e)
            raise FetchError("Failed to fetch invoice data") from e

    async def fetch_invoice_requests(self, status: RequestStatus | str, api_key: str) -> InvoiceRequestList:
        """
        Only page 1 (100 rows) is requested; callers paginate locally.
        """
        status = RequestStatus(status)
        url = self.config.url(f"communication/customer_invoice_requests/{status.value}")
        params = {"page_size": str(REQUESTS_PAGE_SIZE), "page_number": "1"}
        try:
            payload = await self._get_json(url, api_key, params=params)
            page = InvoiceRequestsPage.model_validate(payload)
        except (httpx.HTTPError, ValueError, ValidationError) as e:
            log.exception("fetch_invoice_requests(%s) failed: %s", status.value, e)
            raise FetchError("Failed to fetch invoice requests") from e

        return InvoiceRequestList(requests=page.requests, total=page.page_summary.total)

    async def _get_json(self, url: str, api_key: str, params: dict | None = None):
        headers = api_headers(api_key, self.config.relay_key)
        async with httpx.AsyncClient(transport=self._transport) as client:
            r = await client.get(url, headers=headers, params=params)
            r.raise_for_status()
            return r.json()
