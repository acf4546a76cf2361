from pydantic import BaseModel
from typing import Optional

from app.models.enums import ServiceType


class PricingRow(BaseModel):
    service_type: ServiceType
    name: str
    description: str
    note: Optional[str] = None
    price: Optional[int] = None
    lagos_abuja: Optional[int] = None
    other_states: Optional[int] = None


class PaymentAccount(BaseModel):
    bank: str
    account_number: str
    account_name: str


class PriceQuote(BaseModel):
    service_type: Optional[ServiceType] = None
    state_of_choices: Optional[str] = None
    amount: int
    formatted_amount: str
    rate_label: Optional[str] = None
    payment_account: Optional[PaymentAccount] = None
