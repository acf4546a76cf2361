import pytest
from app.models.enums import ServiceType
from app.services.pricing_service import (
    calculate_fee,
    is_premium_region,
    rate_label,
    pricing_table,
    pricing_prompt_block,
    quote,
)


@pytest.mark.parametrize("service_type, choices, expected", [
    ("link_one", "Lagos", 130000),
    ("link_one", "Kano", 120000),
    ("link_two", "FCT Abuja", 100000),
    ("link_two", "Oyo", 90000),
    ("medical", "Lagos", 240000),
    ("medical", "Oyo", 240000),
    ("origin", "abuja", 250000),
    ("origin", "Kaduna", 250000),
    ("normal_relocate", "LAGOS", 130000),
    ("normal_relocate", "Rivers", 120000),
    ("express_relocate", "Lagos or Ogun", 230000),
    ("express_relocate", "Ogun", 210000),
])
def test_fee_table(service_type, choices, expected):
    assert calculate_fee(service_type, choices) == expected


def test_fee_accepts_enum_members():
    assert calculate_fee(ServiceType.LinkOne, "Lagos") == 130000


def test_unset_or_unknown_service_costs_nothing():
    assert calculate_fee(None, "Lagos") == 0
    assert calculate_fee("", "Lagos") == 0
    assert calculate_fee("space_posting", "Lagos") == 0


def test_missing_state_uses_other_states_rate():
    assert calculate_fee("link_one", None) == 120000
    assert calculate_fee("link_one", "") == 120000


def test_premium_region_is_substring_match():
    assert is_premium_region("I want lagos please")
    assert is_premium_region("ABUJA")
    assert not is_premium_region("Kogi")
    assert not is_premium_region(None)


def test_rate_label():
    assert rate_label("link_one", "Lagos") == "Lagos/Abuja rate applied"
    assert rate_label("link_one", "Kano") == "Other states rate applied"
    assert rate_label("medical", "Lagos") is None
    assert rate_label(None, "Lagos") is None


def test_pricing_table_matches_fee_function():
    rows = pricing_table()
    assert len(rows) == len(ServiceType)

    for row in rows:
        if row["price"] is not None:
            assert calculate_fee(row["service_type"], "Lagos") == row["price"]
            assert calculate_fee(row["service_type"], "Kano") == row["price"]
        else:
            assert calculate_fee(row["service_type"], "Lagos") == row["lagos_abuja"]
            assert calculate_fee(row["service_type"], "Kano") == row["other_states"]


def test_origin_carries_terms_note():
    origin = next(r for r in pricing_table() if r["service_type"] == "origin")
    assert origin["note"] == "Terms and conditions apply"


def test_prompt_block_lists_prices():
    block = pricing_prompt_block()
    assert "Link One" in block
    assert "₦130,000" in block
    assert "₦250,000" in block


def test_quote_includes_payment_account_only_when_due():
    due = quote("express_relocate", "Abuja")
    assert due["amount"] == 230000
    assert due["formatted_amount"] == "₦230,000"
    assert due["payment_account"]["account_number"]

    nothing = quote(None, "Abuja")
    assert nothing["amount"] == 0
    assert nothing["payment_account"] is None


@pytest.mark.asyncio
async def test_pricing_endpoints(client):
    res = await client.get("/api/pricing")
    assert res.status_code == 200
    assert {r["service_type"] for r in res.json()} == {s.value for s in ServiceType}

    res = await client.get("/api/pricing/quote", params={"service_type": "link_two", "state_of_choices": "lagos"})
    assert res.status_code == 200
    assert res.json()["amount"] == 100000
    assert res.json()["rate_label"] == "Lagos/Abuja rate applied"

    res = await client.get("/api/pricing/quote", params={"service_type": "bogus"})
    assert res.status_code == 422
