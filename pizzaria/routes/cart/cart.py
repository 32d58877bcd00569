from datetime import datetime, timezone
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session, select

from pizzaria.database.connection import get_session
from pizzaria.enums.cart import CartStatus
from pizzaria.helpers.cart.pricing import line_identity, price_line
from pizzaria.models.cart.cart import Cart
from pizzaria.models.cart.cart_item import CartItem
from pizzaria.schemas.cart.cart import MAX_ITEM_QUANTITY, CartItemCreate, CartItemRead, CartItemUpdate, CartRead

db_session = get_session


def get_cart_or_404(session: Session, cart_code: str) -> Cart:
    cart = session.exec(select(Cart).where(Cart.code == cart_code)).first()
    if not cart:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Carrinho não encontrado")
    return cart


class CartRouter(APIRouter):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.tags = ["cart"]

        self.add_api_route("/cart/", self.create_cart, methods=["POST"], response_model=CartRead, status_code=201)
        self.add_api_route("/cart/{cart_code}", self.get_cart_by_code, methods=["GET"], response_model=CartRead)
        self.add_api_route("/cart/{cart_code}/items/", self.add_item_by_code, methods=["POST"], response_model=CartItemRead)
        self.add_api_route("/cart/{cart_code}/items/", self.clear_items_by_code, methods=["DELETE"], response_model=dict)
        self.add_api_route("/cart/{cart_code}/items/{item_id}", self.update_item_by_code, methods=["PATCH"], response_model=CartItemRead)
        self.add_api_route("/cart/{cart_code}/items/{item_id}", self.remove_item_by_code, methods=["DELETE"], response_model=dict)

    def _get_active_cart(self, session: Session, cart_code: str) -> Cart:
        cart = get_cart_or_404(session, cart_code)
        if cart.status != CartStatus.ACTIVE:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Carrinho não está mais ativo")
        return cart

    def _touch(self, cart: Cart):
        cart.updated_at = datetime.now(timezone.utc)

    def create_cart(self, session: Session = Depends(db_session)):
        cart = Cart(status=CartStatus.ACTIVE)
        session.add(cart)
        session.commit()
        session.refresh(cart)
        return cart

    def get_cart_by_code(self, cart_code: str, session: Session = Depends(db_session)):
        return get_cart_or_404(session, cart_code)

    def add_item_by_code(self, cart_code: str, item_data: CartItemCreate, session: Session = Depends(db_session)):
        logging.info(f"CARRINHO >>> Item recebido para {cart_code}: {item_data}")
        cart = self._get_active_cart(session, cart_code)

        try:
            priced = price_line(session, item_data)
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        # Junta com uma linha idêntica, se houver
        identity = line_identity(item_data)
        existing_item = next((item for item in cart.items if line_identity(item) == identity), None)

        if existing_item:
            merged_quantity = existing_item.quantity + item_data.quantity
            if merged_quantity > MAX_ITEM_QUANTITY:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"Quantidade máxima por item é {MAX_ITEM_QUANTITY}",
                )
            existing_item.quantity = merged_quantity
            existing_item.unit_price = priced.unit_price
            existing_item.updated_at = datetime.now(timezone.utc)
            item = existing_item
        else:
            item = CartItem(
                cart_id=cart.id,
                kind=item_data.kind,
                pizza_id=item_data.pizza_id,
                second_pizza_id=item_data.second_pizza_id,
                size=priced.size if item_data.pizza_id is not None else None,
                crust_id=item_data.crust_id,
                addon_ids=list(item_data.addon_ids),
                beverage_id=item_data.beverage_id,
                dessert_id=item_data.dessert_id,
                name=priced.name,
                description=priced.description,
                notes=priced.notes,
                quantity=item_data.quantity,
                unit_price=priced.unit_price,
            )

        self._touch(cart)
        session.add(item)
        session.add(cart)
        session.commit()
        session.refresh(item)

        logging.info(f"CARRINHO >>> Item {item.id} ({item.name}) x{item.quantity} no carrinho {cart_code}")
        return item

    def _get_item_or_404(self, session: Session, cart: Cart, item_id: int) -> CartItem:
        item = session.exec(
            select(CartItem).where(CartItem.id == item_id, CartItem.cart_id == cart.id)
        ).first()
        if not item:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item não encontrado no carrinho")
        return item

    def update_item_by_code(self, cart_code: str, item_id: int, update_data: CartItemUpdate, session: Session = Depends(db_session)):
        cart = self._get_active_cart(session, cart_code)
        item = self._get_item_or_404(session, cart, item_id)

        item.quantity = update_data.quantity
        if update_data.notes is not None:
            item.notes = update_data.notes
        item.updated_at = datetime.now(timezone.utc)

        self._touch(cart)
        session.add(item)
        session.add(cart)
        session.commit()
        session.refresh(item)
        return item

    def remove_item_by_code(self, cart_code: str, item_id: int, session: Session = Depends(db_session)):
        cart = self._get_active_cart(session, cart_code)
        item = self._get_item_or_404(session, cart, item_id)

        session.delete(item)
        self._touch(cart)
        session.add(cart)
        session.commit()
        return {"message": "Item removido com sucesso"}

    def clear_items_by_code(self, cart_code: str, session: Session = Depends(db_session)):
        cart = self._get_active_cart(session, cart_code)

        for item in list(cart.items):
            session.delete(item)

        self._touch(cart)
        session.add(cart)
        session.commit()
        return {"message": "Todos os itens foram removidos do carrinho"}
