# pizzaria/helpers/cart/pricing.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sqlmodel import Session, select

from pizzaria.enums.cart import CartItemKind
from pizzaria.enums.product_size import PIZZA_SIZE_LABELS, PizzaSize
from pizzaria.models.product.beverage import Beverage
from pizzaria.models.product.dessert import Dessert
from pizzaria.models.product.extras import Addon, Crust
from pizzaria.models.product.pizza import Pizza


@dataclass
class PricedLine:
    kind: CartItemKind
    name: str
    description: str
    unit_price: float
    quantity: int
    size: Optional[str] = None
    second_half: Optional[str] = None
    crust: Optional[str] = None
    addons: List[str] = field(default_factory=list)
    notes: str = ""

    @property
    def total_price(self) -> float:
        return round(self.unit_price * self.quantity, 2)

    def snapshot(self) -> Dict[str, Any]:
        """Cópia imutável da linha gravada no pedido."""
        return {
            "kind": self.kind.value,
            "name": self.name,
            "description": self.description,
            "size": self.size,
            "second_half": self.second_half,
            "crust": self.crust,
            "addons": list(self.addons),
            "notes": self.notes,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "total_price": self.total_price,
        }


def _size_value(size) -> Optional[str]:
    return getattr(size, "value", size)


def _active(session: Session, model, product_id: Optional[int], label: str):
    product = session.get(model, product_id) if product_id is not None else None
    if not product or not product.is_active:
        raise ValueError(f"{label} inválido(a) ou indisponível")
    return product


def _price_pizza_line(session: Session, line) -> PricedLine:
    size = _size_value(line.size)
    if size not in {s.value for s in PizzaSize}:
        raise ValueError("Tamanho inválido para a pizza")

    pizza = _active(session, Pizza, line.pizza_id, "Pizza")
    halves = [pizza]
    if line.second_pizza_id is not None:
        halves.append(_active(session, Pizza, line.second_pizza_id, "Segunda metade"))

    half_prices = []
    for half in halves:
        price = half.price_for(size)
        if price is None:
            raise ValueError(f"Pizza '{half.name}' não disponível no tamanho {size}")
        half_prices.append(price)

    # Meio a meio cobra pelo sabor mais caro
    unit_price = max(half_prices)

    crust = None
    if line.crust_id is not None:
        crust = _active(session, Crust, line.crust_id, "Borda")
        unit_price += crust.price

    addons: List[Addon] = []
    addon_ids = list(line.addon_ids or [])
    if addon_ids:
        found = {
            a.id: a for a in session.exec(select(Addon).where(Addon.id.in_(addon_ids))).all()
            if a.is_active
        }
        for addon_id in addon_ids:
            if addon_id not in found:
                raise ValueError("Adicional inválido ou indisponível")
            addons.append(found[addon_id])
        unit_price += sum(a.price for a in addons)

    second_half = halves[1].name if len(halves) > 1 else None
    name = pizza.name if not second_half else f"{pizza.name} + {second_half}"

    parts = [PIZZA_SIZE_LABELS[PizzaSize(size)]]
    if second_half:
        parts.append(f"Meia {pizza.name} / Meia {second_half}")
    if crust:
        parts.append(f"Borda {crust.name}")
    if addons:
        parts.append("+ " + ", ".join(a.name for a in addons))

    return PricedLine(
        kind=CartItemKind.PIZZA,
        name=name,
        description=" · ".join(parts),
        unit_price=round(unit_price, 2),
        quantity=line.quantity,
        size=size,
        second_half=second_half,
        crust=crust.name if crust else None,
        addons=[a.name for a in addons],
        notes=line.notes or "",
    )


def price_line(session: Session, line) -> PricedLine:
    """
    Calcula o preço de uma linha do carrinho.

    `line` pode ser um CartItemCreate ou um CartItem persistido: ambos expõem
    `kind`, os ids de produto, `size`, `crust_id`, `addon_ids`, `notes` e
    `quantity`. Produtos inexistentes ou inativos levantam ValueError.
    """
    if line.kind == CartItemKind.PIZZA:
        return _price_pizza_line(session, line)

    if line.kind == CartItemKind.BEVERAGE:
        beverage = _active(session, Beverage, line.beverage_id, "Bebida")
        return PricedLine(
            kind=CartItemKind.BEVERAGE,
            name=beverage.name,
            description=f"{beverage.name} {beverage.size}".strip() if beverage.size else beverage.name,
            unit_price=round(beverage.price, 2),
            quantity=line.quantity,
            size=beverage.size,
            notes=line.notes or "",
        )

    dessert = _active(session, Dessert, line.dessert_id, "Sobremesa")
    return PricedLine(
        kind=CartItemKind.DESSERT,
        name=dessert.name,
        description=dessert.name,
        unit_price=round(dessert.price, 2),
        quantity=line.quantity,
        notes=line.notes or "",
    )


def line_identity(line) -> tuple:
    """Chave usada para juntar linhas idênticas no carrinho."""
    return (
        line.kind,
        line.pizza_id,
        line.second_pizza_id,
        _size_value(line.size),
        line.crust_id,
        tuple(sorted(line.addon_ids or [])),
        line.beverage_id,
        line.dessert_id,
        (line.notes or "").strip(),
    )
