# pizzaria/routes/product/menu.py

from datetime import datetime, timezone
from enum import Enum
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import ValidationError
from sqlmodel import Session, select

from pizzaria.cache.menu import menu_cache
from pizzaria.core.exceptions.app_exception import AppHttpException
from pizzaria.core.middlewares.users import require_admin
from pizzaria.database.connection import get_session
from pizzaria.enums.product_size import PizzaCategory
from pizzaria.models.product.beverage import Beverage
from pizzaria.models.product.dessert import Dessert
from pizzaria.models.product.extras import Addon, Crust
from pizzaria.models.product.pizza import Pizza
from pizzaria.models.user.user import User
from pizzaria.schemas.product.menu import (
    BeverageCreate, BeverageRead, BeverageUpdate,
    DessertCreate, DessertRead, DessertUpdate,
    ExtraCreate, ExtraRead, ExtraUpdate,
    MenuResponse,
    PizzaCreate, PizzaRead, PizzaUpdate,
)

db_session = get_session


class MenuKind(str, Enum):
    pizzas = "pizzas"
    beverages = "beverages"
    desserts = "desserts"
    crusts = "crusts"
    addons = "addons"


# modelo, schema de criação, schema de atualização, schema de leitura
MENU_MODELS = {
    MenuKind.pizzas: (Pizza, PizzaCreate, PizzaUpdate, PizzaRead),
    MenuKind.beverages: (Beverage, BeverageCreate, BeverageUpdate, BeverageRead),
    MenuKind.desserts: (Dessert, DessertCreate, DessertUpdate, DessertRead),
    MenuKind.crusts: (Crust, ExtraCreate, ExtraUpdate, ExtraRead),
    MenuKind.addons: (Addon, ExtraCreate, ExtraUpdate, ExtraRead),
}


class MenuRouter(APIRouter):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.prefix = "/menu"
        self.tags = ["menu"]

        self.add_api_route("", self.get_menu, methods=["GET"], response_model=MenuResponse,
                           summary="Cardápio completo")
        self.add_api_route("/pizzas", self.list_pizzas, methods=["GET"], response_model=List[PizzaRead],
                           summary="Pizzas ativas, opcionalmente por categoria")
        self.add_api_route("/pizzas/{pizza_id}", self.get_pizza, methods=["GET"], response_model=PizzaRead)
        self.add_api_route("/{kind}", self.list_items, methods=["GET"], response_model=List[Dict[str, Any]])
        self.add_api_route("/{kind}", self.create_item, methods=["POST"], response_model=Dict[str, Any],
                           status_code=status.HTTP_201_CREATED)
        self.add_api_route("/{kind}/{item_id}", self.update_item, methods=["PUT"], response_model=Dict[str, Any])
        self.add_api_route("/{kind}/{item_id}", self.deactivate_item, methods=["DELETE"], response_model=dict)

    def get_menu(self, session: Session = Depends(db_session)):
        return menu_cache.get_menu_data(session)

    def list_pizzas(self, category: Optional[PizzaCategory] = None, session: Session = Depends(db_session)):
        stmt = select(Pizza).where(Pizza.is_active == True)  # noqa: E712
        if category:
            stmt = stmt.where(Pizza.category == category)
        return session.exec(stmt.order_by(Pizza.id)).all()

    def get_pizza(self, pizza_id: int, session: Session = Depends(db_session)):
        pizza = session.get(Pizza, pizza_id)
        if not pizza or not pizza.is_active:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pizza não encontrada")
        return pizza

    def list_items(self, kind: MenuKind, session: Session = Depends(db_session)):
        model, _, _, read_schema = MENU_MODELS[kind]
        items = session.exec(select(model).where(model.is_active == True).order_by(model.id)).all()  # noqa: E712
        return [read_schema.model_validate(item).model_dump(mode="json") for item in items]

    def _validate_payload(self, schema, payload: dict):
        try:
            return schema.model_validate(payload)
        except ValidationError as ve:
            raise AppHttpException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="Dados inválidos fornecidos",
                errors=ve.errors(include_url=False, include_context=False),
                solution="Verifique os dados e tente novamente.",
            )

    def create_item(
        self,
        kind: MenuKind,
        payload: Dict[str, Any] = Body(...),
        current_user: User = Depends(require_admin),
        session: Session = Depends(db_session),
    ):
        model, create_schema, _, read_schema = MENU_MODELS[kind]
        data = self._validate_payload(create_schema, payload)

        item = model(**data.model_dump())
        session.add(item)
        session.commit()
        session.refresh(item)
        menu_cache.invalidate()

        logging.info(f"CARDÁPIO >>> {kind.value} #{item.id} criado por {current_user.id}")
        return read_schema.model_validate(item).model_dump(mode="json")

    def _get_item_or_404(self, session: Session, model, item_id: int):
        item = session.get(model, item_id)
        if not item:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item do cardápio não encontrado")
        return item

    def update_item(
        self,
        kind: MenuKind,
        item_id: int,
        payload: Dict[str, Any] = Body(...),
        current_user: User = Depends(require_admin),
        session: Session = Depends(db_session),
    ):
        model, _, update_schema, read_schema = MENU_MODELS[kind]
        data = self._validate_payload(update_schema, payload)
        item = self._get_item_or_404(session, model, item_id)

        for field, value in data.model_dump(exclude_none=True).items():
            setattr(item, field, value)
        item.updated_at = datetime.now(timezone.utc)

        session.add(item)
        session.commit()
        session.refresh(item)
        menu_cache.invalidate()
        return read_schema.model_validate(item).model_dump(mode="json")

    def deactivate_item(
        self,
        kind: MenuKind,
        item_id: int,
        current_user: User = Depends(require_admin),
        session: Session = Depends(db_session),
    ):
        model, _, _, _ = MENU_MODELS[kind]
        item = self._get_item_or_404(session, model, item_id)

        item.is_active = False
        item.updated_at = datetime.now(timezone.utc)
        session.add(item)
        session.commit()
        menu_cache.invalidate()
        return {"message": "Item desativado com sucesso"}
