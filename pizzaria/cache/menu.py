# pizzaria/cache/menu.py
import logging
from typing import Optional

from sqlmodel import Session, select

from pizzaria.enums.product_size import PIZZA_SIZE_LABELS
from pizzaria.models.product.beverage import Beverage
from pizzaria.models.product.dessert import Dessert
from pizzaria.models.product.extras import Addon, Crust
from pizzaria.models.product.pizza import Pizza
from pizzaria.schemas.product.menu import BeverageRead, DessertRead, ExtraRead, PizzaRead
from pizzaria.utils.cache import DataCache

cache = DataCache()


class MenuCacheManager:
    _cache_key_prefix = "menu_"

    def __init__(self):
        self.cache = cache

    def get_cache_key(self, key: str) -> str:
        """Gera a chave de cache completa com o prefixo"""
        return f"{self._cache_key_prefix}{key}"

    def load_cached_data(self, key: str) -> Optional[dict]:
        cache_key = self.get_cache_key(key)
        cached_data = self.cache.get(cache_key)
        if cached_data:
            logging.info(f"CARDÁPIO >>> Dados encontrados no cache para a chave: {cache_key}")
        return cached_data

    def invalidate(self) -> None:
        self.cache.clear_prefix(self._cache_key_prefix)
        logging.info("CARDÁPIO >>> Cache do cardápio invalidado")

    def get_menu_data(self, session: Session) -> dict:
        """Cardápio completo (somente itens ativos), usando cache quando possível."""
        cached = self.load_cached_data("full")
        if cached:
            return cached

        def active(model):
            return session.exec(select(model).where(model.is_active == True).order_by(model.id)).all()  # noqa: E712

        data = {
            "pizzas": [PizzaRead.model_validate(p).model_dump(mode="json") for p in active(Pizza)],
            "beverages": [BeverageRead.model_validate(b).model_dump(mode="json") for b in active(Beverage)],
            "desserts": [DessertRead.model_validate(d).model_dump(mode="json") for d in active(Dessert)],
            "crusts": [ExtraRead.model_validate(c).model_dump(mode="json") for c in active(Crust)],
            "addons": [ExtraRead.model_validate(a).model_dump(mode="json") for a in active(Addon)],
            "sizes": {size.value: label for size, label in PIZZA_SIZE_LABELS.items()},
        }

        self.cache.set(self.get_cache_key("full"), data)
        logging.info("CARDÁPIO >>> Cardápio armazenado no cache")
        return data


menu_cache = MenuCacheManager()
