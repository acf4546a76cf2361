# app/api/endpoints/pricing.py

from fastapi import APIRouter, Query
from typing import List, Optional

from app.models.enums import ServiceType
from app.schemas.pricing import PricingRow, PriceQuote
from app.services.pricing_service import pricing_table, quote

router = APIRouter(prefix="/api/pricing", tags=["Pricing"])


@router.get("", response_model=List[PricingRow])
async def get_pricing():
    return pricing_table()


@router.get("/quote", response_model=PriceQuote)
async def get_quote(
    service_type: Optional[ServiceType] = Query(None),
    state_of_choices: Optional[str] = Query(None),
):
    """Fee preview for the submission form. Unset service type quotes 0."""
    return quote(service_type, state_of_choices)
