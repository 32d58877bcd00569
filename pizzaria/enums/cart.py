from enum import Enum

class CartStatus(str, Enum):
    ACTIVE = "active"         # Carrinho em edição
    COMPLETED = "completed"   # Virou pedido
    EXPIRED = "expired"       # Abandonado/inativo por tempo demais


class CartItemKind(str, Enum):
    PIZZA = "pizza"
    BEVERAGE = "bebida"
    DESSERT = "sobremesa"
