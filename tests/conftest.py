import os
import uuid

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["SEED_DATABASE"] = "true"
os.environ["ABACATEPAY_WEBHOOK_SECRET"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, select

from pizzaria import create_app
from pizzaria.database.connection import engine
from pizzaria.integration.abacatepay import AbacatePayError, Billing, get_abacatepay_client
from pizzaria.models import Addon, Beverage, Crust, Dessert, Pizza, RestaurantSettings

ADMIN = {"email": "admin@pizzaria.com", "password": "admin123"}
EMPLOYEE = {"email": "funcionario@pizzaria.com", "password": "func123"}

ADDRESS = {
    "street": "Rua das Laranjeiras",
    "number": "120",
    "complement": "Apto 301",
    "neighborhood": "Laranjeiras",
    "city": "Rio de Janeiro",
    "cep": "22240003",
}

PAYER = {
    "name": "Maria Souza",
    "phone": "(21) 99876-5432",
    "email": "maria@example.com",
    "cpf": "123.456.789-09",
}


class FakeAbacatePay:
    """Substitui a AbacatePay nos testes, guardando as cobranças criadas."""

    def __init__(self):
        self.statuses = {}
        self.created = []
        self.fail_create = False
        self.fail_status = False

    def create_billing(self, *, order_id, order_code, amount, customer, products=None):
        if self.fail_create:
            raise AbacatePayError("AbacatePay recusou a requisição", 500)

        billing_id = f"bill_{uuid.uuid4().hex[:12]}"
        self.statuses[billing_id] = "PENDING"
        self.created.append({"id": billing_id, "order_id": order_id, "amount": amount, "customer": customer})
        return Billing(
            id=billing_id,
            url=f"https://pay.abacatepay.com/{billing_id}",
            status="PENDING",
            amount=int(round(amount * 100)),
        )

    def get_billing_status(self, billing_id):
        if self.fail_status:
            raise AbacatePayError("Erro ao se comunicar com a AbacatePay")
        return self.statuses.get(billing_id, "PENDING")

    def pay(self, billing_id, status="PAID"):
        self.statuses[billing_id] = status


@pytest.fixture(scope="session")
def app():
    return create_app()


@pytest.fixture(scope="session")
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def abacatepay(app):
    fake = FakeAbacatePay()
    app.dependency_overrides[get_abacatepay_client] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_abacatepay_client, None)


@pytest.fixture
def db_session(app):
    with Session(engine) as session:
        yield session


@pytest.fixture(autouse=True)
def restaurant_open(app):
    yield
    with Session(engine) as session:
        settings = session.exec(select(RestaurantSettings)).first()
        if settings and not settings.is_open:
            settings.is_open = True
            session.add(settings)
            session.commit()


@pytest.fixture(scope="session")
def menu_ids(app):
    with Session(engine) as session:
        return {
            "pizza": {p.name: p.id for p in session.exec(select(Pizza))},
            "beverage": {f"{b.name} {b.size}": b.id for b in session.exec(select(Beverage))},
            "dessert": {d.name: d.id for d in session.exec(select(Dessert))},
            "crust": {c.name: c.id for c in session.exec(select(Crust))},
            "addon": {a.name: a.id for a in session.exec(select(Addon))},
        }


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


def _login(client, credentials):
    response = client.post("/auth/login", json=credentials)
    assert response.status_code == 200, response.text
    return response.json()["token"]


@pytest.fixture(scope="session")
def admin_headers(client):
    return bearer(_login(client, ADMIN))


@pytest.fixture(scope="session")
def employee_headers(client):
    return bearer(_login(client, EMPLOYEE))


@pytest.fixture
def register_customer(client):
    def _register(name="Cliente Teste"):
        payload = {
            "name": name,
            "email": f"cliente_{uuid.uuid4().hex[:10]}@example.com",
            "password": "segredo123",
            "phone": "21998765432",
        }
        response = client.post("/auth/register", json=payload)
        assert response.status_code == 201, response.text
        return bearer(response.json()["token"])

    return _register


@pytest.fixture
def customer_headers(register_customer):
    return register_customer()


@pytest.fixture
def make_cart(client):
    def _make_cart(*items):
        response = client.post("/cart/")
        assert response.status_code == 201, response.text
        code = response.json()["code"]
        for item in items:
            added = client.post(f"/cart/{code}/items/", json=item)
            assert added.status_code == 200, added.text
        return code

    return _make_cart


@pytest.fixture
def pizza_line(menu_ids):
    def _line(name="Calabresa", size="grande", quantity=1, **extra):
        return {"pizza_id": menu_ids["pizza"][name], "size": size, "quantity": quantity, **extra}

    return _line
