def test_profile_read_and_update(client, customer_headers):
    profile = client.get("/profile", headers=customer_headers)
    assert profile.status_code == 200
    assert profile.json()["name"] == "Cliente Teste"

    updated = client.put("/profile", headers=customer_headers, json={"name": "Cliente Atualizado", "phone": "21911112222"})
    assert updated.status_code == 200
    assert updated.json()["name"] == "Cliente Atualizado"
    assert updated.json()["phone"] == "21911112222"


def test_profile_address_formats_cep(client, customer_headers):
    response = client.put("/profile/address", headers=customer_headers, json={
        "street": "Rua A",
        "number": "10",
        "neighborhood": "Centro",
        "cep": "20031-170",
    })
    assert response.status_code == 200
    assert response.json()["cep"] == "20031-170"

    response = client.put("/profile/address", headers=customer_headers, json={
        "street": "Rua A",
        "number": "10",
        "neighborhood": "Centro",
        "cep": "20031170",
    })
    assert response.json()["cep"] == "20031-170"


def test_profile_address_rejects_short_cep(client, customer_headers):
    response = client.put("/profile/address", headers=customer_headers, json={
        "street": "Rua A",
        "number": "10",
        "neighborhood": "Centro",
        "cep": "2003117",
    })
    assert response.status_code == 422


def test_admin_lists_users_with_roles(client, admin_headers):
    response = client.get("/admin/users", headers=admin_headers)
    assert response.status_code == 200
    users = {u["email"]: u for u in response.json()}
    assert users["admin@pizzaria.com"]["roles"] == ["admin"]
    assert users["funcionario@pizzaria.com"]["roles"] == ["employee"]


def test_admin_routes_are_admin_only(client, employee_headers, customer_headers):
    assert client.get("/admin/users", headers=employee_headers).status_code == 403
    assert client.get("/admin/users", headers=customer_headers).status_code == 403


def test_grant_and_revoke_role(client, admin_headers, register_customer):
    headers = register_customer("Futuro Funcionário")
    user_id = client.get("/auth/me", headers=headers).json()["id"]

    granted = client.post(f"/admin/users/{user_id}/roles", headers=admin_headers, json={"role": "employee"})
    assert granted.status_code == 200
    assert granted.json()["roles"] == ["customer", "employee"]
    assert client.get("/staff/orders", headers=headers).status_code == 200

    # Conceder de novo não duplica
    again = client.post(f"/admin/users/{user_id}/roles", headers=admin_headers, json={"role": "employee"})
    assert again.json()["roles"] == ["customer", "employee"]

    revoked = client.delete(f"/admin/users/{user_id}/roles/employee", headers=admin_headers)
    assert revoked.status_code == 200
    assert revoked.json()["roles"] == ["customer"]
    assert client.get("/staff/orders", headers=headers).status_code == 403

    missing = client.delete(f"/admin/users/{user_id}/roles/employee", headers=admin_headers)
    assert missing.status_code == 404


def test_admin_cannot_revoke_own_admin_role(client, admin_headers):
    admin_id = client.get("/auth/me", headers=admin_headers).json()["id"]
    response = client.delete(f"/admin/users/{admin_id}/roles/admin", headers=admin_headers)
    assert response.status_code == 400
    assert client.get("/admin/users", headers=admin_headers).status_code == 200


def test_reviews(client, customer_headers):
    created = client.post("/reviews", headers=customer_headers, json={"rating": 5, "comment": " Ótima pizza! "})
    assert created.status_code == 201
    assert created.json()["comment"] == "Ótima pizza!"
    assert created.json()["customer_name"] == "Cliente Teste"

    assert client.post("/reviews", headers=customer_headers, json={"rating": 6}).status_code == 422
    assert client.post("/reviews", json={"rating": 4}).status_code == 401

    reviews = client.get("/reviews").json()
    assert reviews[0]["id"] == created.json()["id"]
