from models.payment_methods import PaymentMethod


async def test_list_returns_active_methods(client, auth_headers, member_in, active_method, inactive_method):
    response = await client.get("/payment-methods", headers=auth_headers(member_in))

    assert response.status_code == 200
    assert [m["id"] for m in response.json()] == [active_method.id]


async def test_admin_creates_method_with_generated_last4(client, auth_headers, admin):
    response = await client.post("/payment-methods", headers=auth_headers(admin), json={"label": "Office Card"})

    assert response.status_code == 201
    data = response.json()
    assert data["provider"] == "MOCK"
    assert data["brand"] == "MOCK"
    assert len(data["last4"]) == 4 and data["last4"].isdigit()
    assert data["active"] is True
    assert data["is_default"] is False


async def test_new_default_clears_previous_default(client, session, auth_headers, admin, active_method):
    response = await client.post("/payment-methods", headers=auth_headers(admin),
        json={"label": "New Default", "last4": "1111", "is_default": True})

    assert response.status_code == 201
    defaults = session.query(PaymentMethod).filter(PaymentMethod.is_default == True).all()
    assert [m.id for m in defaults] == [response.json()["id"]]


async def test_create_validates_body(client, auth_headers, admin):
    response = await client.post("/payment-methods", headers=auth_headers(admin),
        json={"label": "Bad", "last4": "12", "exp_month": 13})

    assert response.status_code == 422


async def test_manager_cannot_create_method(client, auth_headers, manager_in):
    response = await client.post("/payment-methods", headers=auth_headers(manager_in), json={"label": "Nope"})

    assert response.status_code == 403


async def test_admin_deactivates_method(client, auth_headers, admin, active_method):
    response = await client.patch(f"/payment-methods/{active_method.id}", headers=auth_headers(admin),
        json={"active": False})

    assert response.status_code == 200
    assert response.json()["active"] is False

    response = await client.get("/payment-methods", headers=auth_headers(admin))
    assert response.json() == []


async def test_update_missing_method(client, auth_headers, admin):
    response = await client.patch("/payment-methods/no-such-method", headers=auth_headers(admin),
        json={"label": "x"})

    assert response.status_code == 404
