from dataclasses import dataclass
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

COMPLETED = "COMPLETED"

# Payer fallback when PayPal omits the email. Whether an anonymous
# credential is acceptable for auditing is a deployment decision.
UNKNOWN_PAYER = "unknown"


class CreateOrderRequest(BaseModel):
    product_id: Optional[str] = Field(default=None, alias="productId")


class CaptureOrderRequest(BaseModel):
    order_id: Optional[str] = Field(default=None, alias="orderId")
    product_id: Optional[str] = Field(default=None, alias="productId")


@dataclass(frozen=True)
class CaptureResult:
    status: Optional[str]
    amount: Optional[str]
    currency: Optional[str]
    payer: str

    @property
    def completed(self) -> bool:
        return self.status == COMPLETED

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "CaptureResult":
        """Read the first capture of the first purchase unit of a PayPal order.

        Missing or mistyped fields come back as None, which verification rejects.
        """
        unit = _first(_dict(data).get("purchase_units"))
        capture = _first(_dict(unit.get("payments")).get("captures"))
        amount = _dict(capture.get("amount"))
        payer = _dict(data.get("payer")).get("email_address")
        return cls(
            status=_str(data.get("status")),
            amount=_str(amount.get("value")),
            currency=_str(amount.get("currency_code")),
            payer=_str(payer) or UNKNOWN_PAYER,
        )


def _dict(value) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _first(value) -> Dict[str, Any]:
    return _dict(value[0]) if isinstance(value, list) and value else {}


def _str(value) -> Optional[str]:
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class VerifiedPurchase:
    tier: str
    payer: str
    order_id: str
