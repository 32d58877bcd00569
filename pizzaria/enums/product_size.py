from enum import Enum

class PizzaSize(str, Enum):
    pequena = "pequena"
    media = "media"
    grande = "grande"
    gigante = "gigante"


PIZZA_SIZE_LABELS = {
    PizzaSize.pequena: "Pequena",
    PizzaSize.media: "Média",
    PizzaSize.grande: "Grande",
    PizzaSize.gigante: "Gigante",
}


class PizzaCategory(str, Enum):
    TRADICIONAL = "tradicional"
    ESPECIAL = "especial"
    DOCE = "doce"
