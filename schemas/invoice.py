from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class RequestStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


class InvoiceItem(BaseModel):
    """One line of an invoice. `total` is trusted as sent by Takealot."""
    model_config = ConfigDict(frozen=True)

    description: str = ""
    quantity: int = 0
    unit_price: float = 0.0
    total: float = 0.0

    @field_validator("description", mode="before")
    @classmethod
    def _null_as_empty(cls, v):
        return "" if v is None else v


class InvoiceData(BaseModel):
    """
    Payload of GET /sales/customer_invoice_request/{id}.
    invoice_date is epoch seconds sent as a string (e.g. "1700000000").
    """
    model_config = ConfigDict(frozen=True)

    order_number: int
    customer_name: str = ""
    business_name: str = ""
    vat_number: Optional[str] = None
    invoice_date: str = ""
    invoice_items: List[InvoiceItem] = []
    customer_message: Optional[str] = None

    @field_validator("invoice_date", mode="before")
    @classmethod
    def _epoch_as_text(cls, v):
        # Takealot sends a string, but tolerate a bare int
        return "" if v is None else str(v)

    @field_validator("customer_name", "business_name", mode="before")
    @classmethod
    def _null_as_empty(cls, v):
        # individual buyers come back with business_name: null
        return "" if v is None else v


class InvoiceRequest(BaseModel):
    request_id: int
    context_id: int
    created_at: str
    closed_at: Optional[str] = None

    @field_validator("created_at", mode="before")
    @classmethod
    def _null_as_empty(cls, v):
        return "" if v is None else v


class PageSummary(BaseModel):
    total: int = 0
    page_size: int = 0
    page_number: int = 0


class InvoiceRequestsPage(BaseModel):
    """Wire shape of GET /communication/customer_invoice_requests/{status}."""
    requests: List[InvoiceRequest] = []
    page_summary: PageSummary = PageSummary()


class InvoiceRequestList(BaseModel):
    requests: List[InvoiceRequest] = []
    total: int = 0


class NoteIn(BaseModel):
    note: str = ""


class UploadOut(BaseModel):
    request_id: int
    filename: str
    uploaded: bool = True
