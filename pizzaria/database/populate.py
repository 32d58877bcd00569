import logging

from sqlmodel import Session, select

from pizzaria.auth.auth import hash_password
from pizzaria.configuration.settings import Configuration
from pizzaria.enums.product_size import PizzaCategory
from pizzaria.enums.user_role import UserRole
from pizzaria.models import Addon, Beverage, Crust, Dessert, Pizza, RestaurantSettings, User, UserRoleAssignment

# Carregar configuração global
configuration = Configuration()

PIZZAS = [
    {
        "name": "Margherita",
        "description": "Molho de tomate, mussarela, tomate e manjericão",
        "category": PizzaCategory.TRADICIONAL,
        "prices": {"pequena": 35.0, "media": 45.0, "grande": 55.0, "gigante": 65.0},
    },
    {
        "name": "Calabresa",
        "description": "Mussarela, calabresa fatiada e cebola",
        "category": PizzaCategory.TRADICIONAL,
        "prices": {"pequena": 35.0, "media": 45.0, "grande": 55.0, "gigante": 65.0},
    },
    {
        "name": "Portuguesa",
        "description": "Presunto, ovo, cebola, ervilha, azeitona e mussarela",
        "category": PizzaCategory.TRADICIONAL,
        "prices": {"pequena": 38.0, "media": 48.0, "grande": 58.0, "gigante": 68.0},
    },
    {
        "name": "Quatro Queijos",
        "description": "Mussarela, provolone, parmesão e gorgonzola",
        "category": PizzaCategory.ESPECIAL,
        "prices": {"pequena": 42.0, "media": 54.0, "grande": 66.0, "gigante": 78.0},
    },
    {
        "name": "Frango com Catupiry",
        "description": "Frango desfiado com catupiry original",
        "category": PizzaCategory.ESPECIAL,
        "prices": {"pequena": 40.0, "media": 52.0, "grande": 64.0, "gigante": 76.0},
    },
    {
        "name": "Chocolate com Morango",
        "description": "Chocolate ao leite com morangos frescos",
        "category": PizzaCategory.DOCE,
        "prices": {"pequena": 38.0, "media": 48.0, "grande": 58.0},
    },
]

BEVERAGES = [
    {"name": "Coca-Cola", "size": "350ml", "price": 6.0},
    {"name": "Coca-Cola", "size": "2L", "price": 14.0},
    {"name": "Guaraná Antarctica", "size": "2L", "price": 12.0},
    {"name": "Suco de Laranja", "size": "500ml", "price": 9.0},
    {"name": "Água Mineral", "size": "500ml", "price": 4.0},
]

DESSERTS = [
    {"name": "Petit Gâteau", "description": "Com sorvete de creme", "price": 18.0},
    {"name": "Pudim", "description": "Pudim de leite condensado", "price": 12.0},
]

CRUSTS = [
    {"name": "Catupiry", "price": 10.0},
    {"name": "Cheddar", "price": 10.0},
    {"name": "Chocolate", "price": 12.0},
]

ADDONS = [
    {"name": "Bacon", "price": 6.0},
    {"name": "Azeitona", "price": 3.0},
    {"name": "Milho", "price": 3.0},
    {"name": "Cebola Caramelizada", "price": 5.0},
]


def populate_database(session: Session):
    """Inicializa o banco de dados e popula com dados iniciais."""
    populate_restaurant_settings(session)
    populate_user(session, "Administrador", configuration.admin_email, configuration.admin_password, UserRole.ADMIN)
    populate_user(session, "Funcionário", configuration.employee_email, configuration.employee_password, UserRole.EMPLOYEE)
    populate_menu(session)


def populate_restaurant_settings(session: Session) -> RestaurantSettings:
    """Cria a configuração da loja (aberta), se ainda não existir."""
    settings = session.exec(select(RestaurantSettings)).first()
    if not settings:
        settings = RestaurantSettings(name="Pizzaria", is_open=True)
        session.add(settings)
        session.commit()
        session.refresh(settings)
    return settings


def populate_user(session: Session, name: str, email: str, password: str, role: UserRole) -> User:
    """Cria um usuário da equipe com o papel informado, se ainda não existir."""
    user = session.exec(select(User).where(User.email == email)).first()
    if user:
        return user

    user = User(name=name, email=email, password_hash=hash_password(password))
    user.roles.append(UserRoleAssignment(role=role))
    session.add(user)
    session.commit()
    session.refresh(user)
    logging.info(f"BANCO DE DADOS >>> Usuário {role.value} criado: {email}")
    return user


def populate_menu(session: Session):
    """Carga do cardápio; só roda com o cardápio vazio."""
    if session.exec(select(Pizza)).first():
        return

    for data in PIZZAS:
        session.add(Pizza(**data))
    for data in BEVERAGES:
        session.add(Beverage(**data))
    for data in DESSERTS:
        session.add(Dessert(**data))
    for data in CRUSTS:
        session.add(Crust(**data))
    for data in ADDONS:
        session.add(Addon(**data))

    session.commit()
    logging.info("BANCO DE DADOS >>> Cardápio inicial criado")
