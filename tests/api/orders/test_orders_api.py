from models.order_items import OrderItem
from models.payments import Payment


async def _create_order(client, headers, restaurant_id):
    response = await client.post("/orders", headers=headers, json={"restaurant_id": restaurant_id})
    assert response.status_code == 201
    return response.json()


async def test_example_scenario(client, session, auth_headers, member_us, manager_us, admin,
    restaurant_in, biryani, active_method):
    """US member orders from an Indian restaurant, a manager pays, an admin cancels."""
    order = await _create_order(client, auth_headers(member_us), restaurant_in.id)

    # Cross-country on purpose: country from the user, currency from the restaurant
    assert order["country"] == "US"
    assert order["currency"] == "INR"
    assert order["status"] == "DRAFT"
    assert order["total_amount_cents"] == 0

    response = await client.post(f"/orders/{order['id']}/items", headers=auth_headers(member_us),
        json={"menu_item_id": biryani.id, "quantity": 2})
    assert response.status_code == 200
    assert response.json()["total_amount_cents"] == 7000
    assert len(response.json()["items"]) == 1

    response = await client.post(f"/orders/{order['id']}/checkout", headers=auth_headers(manager_us),
        json={"payment_method_id": active_method.id})
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "PAID"
    assert data["payment"]["status"] == "SUCCEEDED"
    assert data["payment"]["amount_cents"] == 7000
    assert data["payment"]["currency"] == "INR"
    assert session.query(Payment).count() == 1

    response = await client.post(f"/orders/{order['id']}/cancel", headers=auth_headers(admin))
    assert response.status_code == 200
    assert response.json()["status"] == "CANCELED"
    assert response.json()["payment"]["status"] == "CANCELED"


async def test_add_item_replaces_quantity(client, auth_headers, member_in, restaurant_in, biryani):
    order = await _create_order(client, auth_headers(member_in), restaurant_in.id)

    await client.post(f"/orders/{order['id']}/items", headers=auth_headers(member_in),
        json={"menu_item_id": biryani.id, "quantity": 2})
    response = await client.post(f"/orders/{order['id']}/items", headers=auth_headers(member_in),
        json={"menu_item_id": biryani.id, "quantity": 5})

    data = response.json()
    assert len(data["items"]) == 1
    assert data["items"][0]["quantity"] == 5
    assert data["total_amount_cents"] == 5 * 3500


async def test_add_item_validates_quantity(client, auth_headers, member_in, restaurant_in, biryani):
    order = await _create_order(client, auth_headers(member_in), restaurant_in.id)

    response = await client.post(f"/orders/{order['id']}/items", headers=auth_headers(member_in),
        json={"menu_item_id": biryani.id, "quantity": 0})

    assert response.status_code == 422


async def test_remove_item(client, session, auth_headers, member_in, restaurant_in, biryani, dosa):
    order = await _create_order(client, auth_headers(member_in), restaurant_in.id)
    await client.post(f"/orders/{order['id']}/items", headers=auth_headers(member_in),
        json={"menu_item_id": biryani.id, "quantity": 1})
    response = await client.post(f"/orders/{order['id']}/items", headers=auth_headers(member_in),
        json={"menu_item_id": dosa.id, "quantity": 2})
    dosa_line = next(i for i in response.json()["items"] if i["menu_item_id"] == dosa.id)

    response = await client.delete(f"/orders/{order['id']}/items/{dosa_line['id']}", headers=auth_headers(member_in))

    assert response.status_code == 200
    assert response.json()["total_amount_cents"] == 3500
    assert [i["menu_item_id"] for i in response.json()["items"]] == [biryani.id]


async def test_remove_item_of_another_order_is_not_found(client, session, auth_headers, member_in, restaurant_in, biryani):
    first = await _create_order(client, auth_headers(member_in), restaurant_in.id)
    second = await _create_order(client, auth_headers(member_in), restaurant_in.id)
    response = await client.post(f"/orders/{first['id']}/items", headers=auth_headers(member_in),
        json={"menu_item_id": biryani.id, "quantity": 1})
    line_id = response.json()["items"][0]["id"]

    response = await client.delete(f"/orders/{second['id']}/items/{line_id}", headers=auth_headers(member_in))

    assert response.status_code == 404
    assert session.query(OrderItem).filter(OrderItem.id == line_id).count() == 1


async def test_member_cannot_checkout(client, auth_headers, member_in, restaurant_in, biryani, active_method):
    order = await _create_order(client, auth_headers(member_in), restaurant_in.id)
    await client.post(f"/orders/{order['id']}/items", headers=auth_headers(member_in),
        json={"menu_item_id": biryani.id, "quantity": 1})

    response = await client.post(f"/orders/{order['id']}/checkout", headers=auth_headers(member_in),
        json={"payment_method_id": active_method.id})

    assert response.status_code == 403
    assert "access denied" in response.json()["detail"].lower()


async def test_member_cannot_cancel(client, auth_headers, member_in, restaurant_in):
    order = await _create_order(client, auth_headers(member_in), restaurant_in.id)

    response = await client.post(f"/orders/{order['id']}/cancel", headers=auth_headers(member_in))

    assert response.status_code == 403


async def test_checkout_empty_order(client, auth_headers, manager_in, restaurant_in, active_method):
    order = await _create_order(client, auth_headers(manager_in), restaurant_in.id)

    response = await client.post(f"/orders/{order['id']}/checkout", headers=auth_headers(manager_in),
        json={"payment_method_id": active_method.id})

    assert response.status_code == 422
    assert "at least one item" in response.json()["detail"].lower()


async def test_checkout_paid_order_twice(client, session, auth_headers, manager_in, restaurant_in, biryani, active_method):
    order = await _create_order(client, auth_headers(manager_in), restaurant_in.id)
    await client.post(f"/orders/{order['id']}/items", headers=auth_headers(manager_in),
        json={"menu_item_id": biryani.id, "quantity": 1})

    first = await client.post(f"/orders/{order['id']}/checkout", headers=auth_headers(manager_in),
        json={"payment_method_id": active_method.id})
    second = await client.post(f"/orders/{order['id']}/checkout", headers=auth_headers(manager_in),
        json={"payment_method_id": active_method.id})

    assert first.status_code == 200
    assert second.status_code == 409
    assert session.query(Payment).count() == 1


async def test_add_item_to_paid_order(client, auth_headers, manager_in, restaurant_in, biryani, active_method):
    order = await _create_order(client, auth_headers(manager_in), restaurant_in.id)
    await client.post(f"/orders/{order['id']}/items", headers=auth_headers(manager_in),
        json={"menu_item_id": biryani.id, "quantity": 1})
    await client.post(f"/orders/{order['id']}/checkout", headers=auth_headers(manager_in),
        json={"payment_method_id": active_method.id})

    response = await client.post(f"/orders/{order['id']}/items", headers=auth_headers(manager_in),
        json={"menu_item_id": biryani.id, "quantity": 3})

    assert response.status_code == 422
    assert "draft" in response.json()["detail"].lower()


async def test_declined_checkout(client, auth_headers, manager_in, restaurant_in, biryani, inactive_method):
    order = await _create_order(client, auth_headers(manager_in), restaurant_in.id)
    await client.post(f"/orders/{order['id']}/items", headers=auth_headers(manager_in),
        json={"menu_item_id": biryani.id, "quantity": 1})

    response = await client.post(f"/orders/{order['id']}/checkout", headers=auth_headers(manager_in),
        json={"payment_method_id": inactive_method.id})

    assert response.status_code == 402
    assert response.json()["detail"]["code"] == "INACTIVE_PAYMENT_METHOD"

    response = await client.get(f"/orders/{order['id']}", headers=auth_headers(manager_in))
    assert response.json()["status"] == "DRAFT"
    assert response.json()["payment"]["status"] == "FAILED"


async def test_checkout_with_unknown_payment_method(client, auth_headers, manager_in, restaurant_in, biryani):
    order = await _create_order(client, auth_headers(manager_in), restaurant_in.id)
    await client.post(f"/orders/{order['id']}/items", headers=auth_headers(manager_in),
        json={"menu_item_id": biryani.id, "quantity": 1})

    response = await client.post(f"/orders/{order['id']}/checkout", headers=auth_headers(manager_in),
        json={"payment_method_id": "no-such-method"})

    assert response.status_code == 404
    assert "payment method not found" in response.json()["detail"].lower()


async def test_create_order_unknown_restaurant(client, auth_headers, member_in):
    response = await client.post("/orders", headers=auth_headers(member_in), json={"restaurant_id": "nope"})

    assert response.status_code == 404
    assert "restaurant not found" in response.json()["detail"].lower()
