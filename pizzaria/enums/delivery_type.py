from enum import Enum

class DeliveryType(str, Enum):
    DELIVERY = "delivery"
    PICKUP = "retirada"
