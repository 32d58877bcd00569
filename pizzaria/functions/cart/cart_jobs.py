from datetime import timedelta
import logging

from sqlmodel import select

from pizzaria.core.utils.datetime_utils import utcnow
from pizzaria.database.connection import session_scope
from pizzaria.enums.cart import CartStatus
from pizzaria.models.cart.cart import Cart

CART_EXPIRATION_DAYS = 7
EXPIRED_CART_RETENTION_DAYS = 30


def expire_old_carts() -> int:
    now = utcnow()
    threshold = now - timedelta(days=CART_EXPIRATION_DAYS)

    with session_scope() as session:
        carts = session.exec(
            select(Cart).where(
                Cart.status == CartStatus.ACTIVE,
                Cart.updated_at < threshold
            )
        ).all()

        for cart in carts:
            cart.status = CartStatus.EXPIRED
            cart.updated_at = now
            session.add(cart)

    logging.info(f"CARRINHO >>> {len(carts)} carrinhos marcados como expirados")
    return len(carts)


def delete_expired_carts() -> int:
    threshold = utcnow() - timedelta(days=EXPIRED_CART_RETENTION_DAYS)

    with session_scope() as session:
        carts = session.exec(
            select(Cart).where(
                Cart.status == CartStatus.EXPIRED,
                Cart.updated_at < threshold
            )
        ).all()

        for cart in carts:
            session.delete(cart)

    logging.info(f"CARRINHO >>> {len(carts)} carrinhos expirados apagados permanentemente")
    return len(carts)
