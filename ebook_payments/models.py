from dataclasses import dataclass, field
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt

SUCCEEDED = "succeeded"


@dataclass(frozen=True)
class Intent:
    id: str
    status: str
    client_secret: Optional[str] = None
    amount: Optional[int] = None
    currency: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.status == SUCCEEDED


class PaymentIntentRequest(BaseModel):
    amount: StrictInt = Field(gt=0)                # cents


class PaymentIntentResponse(BaseModel):
    clientSecret: str
    paymentIntentId: str


class ConfirmPaymentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    payment_intent_id: str = Field(alias="paymentIntentId", min_length=1)


class ConfirmPaymentResponse(BaseModel):
    success: bool = True
    downloadUrl: str
