"""Application DTOs for gateway callbacks."""

from typing import Optional

from pydantic import BaseModel


class WebhookAckDTO(BaseModel):
    """Acknowledgement returned to the gateway."""

    success: bool = True
    outcome: str
    invoice_status: Optional[str] = None
    order_id: Optional[int] = None

    model_config = {"frozen": True}
