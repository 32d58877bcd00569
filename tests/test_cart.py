def test_create_and_read_empty_cart(client):
    created = client.post("/cart/")
    assert created.status_code == 201
    code = created.json()["code"]
    assert len(code) == 10

    cart = client.get(f"/cart/{code}").json()
    assert cart["status"] == "active"
    assert cart["items"] == []
    assert cart["subtotal"] == 0
    assert cart["total_items"] == 0


def test_unknown_cart(client):
    assert client.get("/cart/naoexiste").status_code == 404
    assert client.post("/cart/naoexiste/items/", json={"dessert_id": 1}).status_code == 404


def test_half_and_half_pizza_uses_higher_price(client, make_cart, pizza_line, menu_ids):
    code = make_cart()
    response = client.post(f"/cart/{code}/items/", json=pizza_line(
        "Margherita",
        quantity=2,
        second_pizza_id=menu_ids["pizza"]["Quatro Queijos"],
        crust_id=menu_ids["crust"]["Catupiry"],
        addon_ids=[menu_ids["addon"]["Bacon"], menu_ids["addon"]["Azeitona"]],
    ))
    assert response.status_code == 200, response.text
    item = response.json()

    # 66 (Quatro Queijos grande) + 10 (borda) + 6 + 3 (adicionais)
    assert item["unit_price"] == 85.0
    assert item["total_price"] == 170.0
    assert item["kind"] == "pizza"
    assert item["name"] == "Margherita + Quatro Queijos"
    assert item["description"] == "Grande · Meia Margherita / Meia Quatro Queijos · Borda Catupiry · + Bacon, Azeitona"

    cart = client.get(f"/cart/{code}").json()
    assert cart["subtotal"] == 170.0
    assert cart["total_items"] == 2


def test_beverage_and_dessert_lines(client, make_cart, menu_ids):
    code = make_cart(
        {"beverage_id": menu_ids["beverage"]["Coca-Cola 2L"], "quantity": 2},
        {"dessert_id": menu_ids["dessert"]["Pudim"]},
    )
    cart = client.get(f"/cart/{code}").json()
    kinds = {item["kind"]: item for item in cart["items"]}
    assert kinds["bebida"]["total_price"] == 28.0
    assert kinds["sobremesa"]["unit_price"] == 12.0
    assert cart["subtotal"] == 40.0


def test_identical_lines_are_merged(client, make_cart, pizza_line):
    code = make_cart(pizza_line("Calabresa"), pizza_line("Calabresa", quantity=2))
    cart = client.get(f"/cart/{code}").json()
    assert len(cart["items"]) == 1
    assert cart["items"][0]["quantity"] == 3

    # Observação diferente gera outra linha
    client.post(f"/cart/{code}/items/", json=pizza_line("Calabresa", notes="sem cebola"))
    assert len(client.get(f"/cart/{code}").json()["items"]) == 2


def test_merged_quantity_respects_item_cap(client, make_cart, pizza_line):
    code = make_cart(pizza_line("Margherita", quantity=30))

    response = client.post(f"/cart/{code}/items/", json=pizza_line("Margherita", quantity=21))
    assert response.status_code == 400
    assert response.json()["detail"] == "Quantidade máxima por item é 50"
    assert client.get(f"/cart/{code}").json()["items"][0]["quantity"] == 30

    assert client.post(f"/cart/{code}/items/", json=pizza_line("Margherita", quantity=20)).status_code == 200
    assert client.get(f"/cart/{code}").json()["items"][0]["quantity"] == 50


def test_line_must_have_exactly_one_product(client, make_cart, menu_ids):
    code = make_cart()
    assert client.post(f"/cart/{code}/items/", json={"quantity": 1}).status_code == 422
    both = {"pizza_id": menu_ids["pizza"]["Calabresa"], "size": "media", "beverage_id": 1}
    assert client.post(f"/cart/{code}/items/", json=both).status_code == 422


def test_pizza_only_options(client, make_cart, menu_ids):
    code = make_cart()
    no_size = {"pizza_id": menu_ids["pizza"]["Calabresa"]}
    assert client.post(f"/cart/{code}/items/", json=no_size).status_code == 422

    drink_with_crust = {"beverage_id": menu_ids["beverage"]["Coca-Cola 2L"], "crust_id": menu_ids["crust"]["Cheddar"]}
    assert client.post(f"/cart/{code}/items/", json=drink_with_crust).status_code == 422

    bad_size = {"pizza_id": menu_ids["pizza"]["Calabresa"], "size": "familia"}
    assert client.post(f"/cart/{code}/items/", json=bad_size).status_code == 422


def test_unavailable_products_are_rejected(client, make_cart, pizza_line, menu_ids):
    code = make_cart()
    assert client.post(f"/cart/{code}/items/", json={"pizza_id": 99999, "size": "media"}).status_code == 400

    # Pizza doce não tem tamanho gigante
    response = client.post(f"/cart/{code}/items/", json=pizza_line("Chocolate com Morango", size="gigante"))
    assert response.status_code == 400

    response = client.post(f"/cart/{code}/items/", json=pizza_line(addon_ids=[99999]))
    assert response.status_code == 400


def test_update_remove_and_clear_items(client, make_cart, pizza_line, menu_ids):
    code = make_cart(pizza_line("Portuguesa"), {"dessert_id": menu_ids["dessert"]["Petit Gâteau"]})
    items = client.get(f"/cart/{code}").json()["items"]
    pizza = next(i for i in items if i["kind"] == "pizza")
    dessert = next(i for i in items if i["kind"] == "sobremesa")

    updated = client.patch(f"/cart/{code}/items/{pizza['id']}", json={"quantity": 4, "notes": "bem assada"})
    assert updated.status_code == 200
    assert updated.json()["quantity"] == 4
    assert updated.json()["total_price"] == 232.0
    assert updated.json()["notes"] == "bem assada"

    assert client.patch(f"/cart/{code}/items/{pizza['id']}", json={"quantity": 0}).status_code == 422

    assert client.delete(f"/cart/{code}/items/{dessert['id']}").status_code == 200
    assert client.delete(f"/cart/{code}/items/{dessert['id']}").status_code == 404
    assert len(client.get(f"/cart/{code}").json()["items"]) == 1

    assert client.delete(f"/cart/{code}/items/").status_code == 200
    cart = client.get(f"/cart/{code}").json()
    assert cart["items"] == []
    assert cart["subtotal"] == 0
