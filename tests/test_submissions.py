import pytest
from conftest import register, make_admin, submit, submission_form, PNG_BYTES


@pytest.mark.asyncio
async def test_create_submission_computes_fee(client, user_auth):
    headers, user = user_auth

    res = await submit(client, headers, service_type="express_relocate", state_of_choices="lagos")
    assert res.status_code == 201, res.text
    body = res.json()
    assert body["calculated_amount"] == 230000
    assert body["status"] == "pending"
    assert body["payment_verified"] is False
    assert body["user_id"] == user["id"]
    assert body["payment_proof_url"].endswith("proof.png")


@pytest.mark.asyncio
async def test_client_supplied_amount_is_ignored(client, user_auth):
    headers, _ = user_auth
    res = await submit(client, headers, service_type="link_two", state_of_choices="Kano", calculated_amount="5")
    assert res.status_code == 201
    assert res.json()["calculated_amount"] == 90000


@pytest.mark.asyncio
async def test_blank_nysc_email_stored_as_none(client, user_auth):
    headers, _ = user_auth
    res = await submit(client, headers, nysc_email="  ")
    assert res.status_code == 201

    admin_headers, _ = await make_admin()
    res = await client.get("/api/admin/submissions", headers=admin_headers)
    assert res.json()[0]["nysc_email"] is None


@pytest.mark.asyncio
@pytest.mark.parametrize("overrides", [
    {"service_type": "space_posting"},
    {"name": "A"},
    {"call_up": "x" * 51},
    {"nysc_email": "not-an-email"},
])
async def test_invalid_form_rejected_before_upload(client, user_auth, overrides):
    headers, _ = user_auth
    res = await submit(client, headers, **overrides)
    assert res.status_code == 422


@pytest.mark.asyncio
async def test_payment_proof_is_required(client, user_auth):
    headers, _ = user_auth
    res = await client.post("/api/submissions", data=submission_form(), headers=headers)
    assert res.status_code == 422


@pytest.mark.asyncio
async def test_upload_requires_configured_storage(client, user_auth):
    headers, _ = user_auth
    # storage credentials are blank in tests, so the real uploader refuses
    res = await client.post(
        "/api/submissions",
        data=submission_form(),
        files={"payment_proof": ("proof.png", PNG_BYTES, "image/png")},
        headers=headers,
    )
    assert res.status_code == 500


@pytest.mark.asyncio
async def test_my_submissions_newest_first_and_search(client, user_auth):
    headers, _ = user_auth
    await submit(client, headers, name="First Entry", course="Law")
    await submit(client, headers, name="Second Entry", course="Medicine", service_type="medical")

    other_headers, _ = await register(client)
    await submit(client, other_headers, name="Someone Else")

    res = await client.get("/api/submissions/my", headers=headers)
    assert res.status_code == 200
    assert [s["name"] for s in res.json()] == ["Second Entry", "First Entry"]

    res = await client.get("/api/submissions/my", params={"search": "medic"}, headers=headers)
    assert [s["name"] for s in res.json()] == ["Second Entry"]

    res = await client.get("/api/submissions/my", params={"search": "pending"}, headers=headers)
    assert len(res.json()) == 2


@pytest.mark.asyncio
async def test_single_submission_visible_to_owner_and_admin_only(client, user_auth):
    headers, _ = user_auth
    created = (await submit(client, headers)).json()

    res = await client.get(f"/api/submissions/{created['id']}", headers=headers)
    assert res.status_code == 200

    stranger_headers, _ = await register(client)
    res = await client.get(f"/api/submissions/{created['id']}", headers=stranger_headers)
    assert res.status_code == 404

    admin_headers, _ = await make_admin()
    res = await client.get(f"/api/submissions/{created['id']}", headers=admin_headers)
    assert res.status_code == 200


@pytest.mark.asyncio
async def test_owner_view_hides_credentials(client, user_auth):
    headers, _ = user_auth
    res = await submit(client, headers, nysc_email="corper@nysc.gov.ng", nysc_password="secret")
    assert "nysc_password" not in res.json()
    assert "admin_notes" not in res.json()
