# app/services/pricing_service.py

from typing import Optional, Union

from app.core.config import settings
from app.models.enums import ServiceType

PREMIUM_REGIONS = ("lagos", "abuja")

# (lagos/abuja fee, other states fee); flat services carry the same value twice
FEE_TABLE: dict[ServiceType, tuple[int, int]] = {
    ServiceType.LinkOne: (130000, 120000),
    ServiceType.LinkTwo: (100000, 90000),
    ServiceType.Medical: (240000, 240000),
    ServiceType.Origin: (250000, 250000),
    ServiceType.NormalRelocate: (130000, 120000),
    ServiceType.ExpressRelocate: (230000, 210000),
}

FLAT_SERVICES = {ServiceType.Medical, ServiceType.Origin}

SERVICE_INFO: dict[ServiceType, dict] = {
    ServiceType.LinkOne: {
        "name": "Link One",
        "description": "Standard direct posting service",
    },
    ServiceType.LinkTwo: {
        "name": "Link Two",
        "description": "Alternative posting option",
    },
    ServiceType.Medical: {
        "name": "Medical",
        "description": "Medical personnel posting",
    },
    ServiceType.Origin: {
        "name": "Origin",
        "description": "State of origin posting",
        "note": "Terms and conditions apply",
    },
    ServiceType.NormalRelocate: {
        "name": "Normal Relocation",
        "description": "This will be approved when the next batch stream is about leaving Camp",
    },
    ServiceType.ExpressRelocate: {
        "name": "Express Relocation",
        "description": "This usually takes 2-5 (working days)",
    },
}


def _coerce(service_type: Union[ServiceType, str, None]) -> Optional[ServiceType]:
    if not service_type:
        return None
    if isinstance(service_type, ServiceType):
        return service_type
    try:
        return ServiceType(service_type)
    except ValueError:
        return None


def is_premium_region(state_of_choices: Optional[str]) -> bool:
    choices = (state_of_choices or "").lower()
    return any(region in choices for region in PREMIUM_REGIONS)


def calculate_fee(
    service_type: Union[ServiceType, str, None],
    state_of_choices: Optional[str],
) -> int:
    """
    Flat fee for a posting service.
    Region-priced services charge the Lagos/Abuja rate when the free-text
    state of choices mentions either city; unset or unknown services cost 0.
    """
    service = _coerce(service_type)
    if service is None:
        return 0

    premium_fee, standard_fee = FEE_TABLE[service]
    return premium_fee if is_premium_region(state_of_choices) else standard_fee


def rate_label(
    service_type: Union[ServiceType, str, None],
    state_of_choices: Optional[str],
) -> Optional[str]:
    service = _coerce(service_type)
    if service is None or service in FLAT_SERVICES:
        return None
    if is_premium_region(state_of_choices):
        return "Lagos/Abuja rate applied"
    return "Other states rate applied"


def display_name(service_type: Union[ServiceType, str, None]) -> str:
    service = _coerce(service_type)
    if service is None:
        return "N/A"
    return SERVICE_INFO[service]["name"]


def format_naira(amount: int) -> str:
    return f"₦{amount:,}"


def pricing_table() -> list[dict]:
    rows = []
    for service, (premium_fee, standard_fee) in FEE_TABLE.items():
        info = SERVICE_INFO[service]
        row = {
            "service_type": service.value,
            "name": info["name"],
            "description": info["description"],
            "note": info.get("note"),
            "price": None,
            "lagos_abuja": None,
            "other_states": None,
        }
        if service in FLAT_SERVICES:
            row["price"] = premium_fee
        else:
            row["lagos_abuja"] = premium_fee
            row["other_states"] = standard_fee
        rows.append(row)
    return rows


def payment_account() -> dict:
    return {
        "bank": settings.PAYMENT_BANK_NAME,
        "account_number": settings.PAYMENT_ACCOUNT_NUMBER,
        "account_name": settings.PAYMENT_ACCOUNT_NAME,
    }


def quote(service_type: Union[ServiceType, str, None], state_of_choices: Optional[str]) -> dict:
    amount = calculate_fee(service_type, state_of_choices)
    return {
        "service_type": _coerce(service_type),
        "state_of_choices": state_of_choices,
        "amount": amount,
        "formatted_amount": format_naira(amount),
        "rate_label": rate_label(service_type, state_of_choices),
        # nothing to pay until a service is chosen
        "payment_account": payment_account() if amount > 0 else None,
    }


def pricing_prompt_block() -> str:
    """Plain-text pricing summary embedded in the AI chat system prompt."""
    lines = ["SERVICE PRICING INFORMATION (AVAILABLE ON THIS PORTAL):", ""]
    for index, row in enumerate(pricing_table(), start=1):
        lines.append(f"{index}. {row['name']}")
        if row["price"] is not None:
            lines.append(f"   - Price: {format_naira(row['price'])}")
        else:
            lines.append(f"   - Lagos/Abuja: {format_naira(row['lagos_abuja'])}")
            lines.append(f"   - Other States: {format_naira(row['other_states'])}")
        lines.append(f"   - Description: {row['description']}")
        if row["note"]:
            lines.append(f"   - Note: {row['note']}")
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"
