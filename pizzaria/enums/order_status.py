from enum import Enum

# aguardando_pagamento -> recebido -> em_preparo -> pronto_retirada | saiu_entrega -> entregue
class OrderStatus(str, Enum):
    AWAITING_PAYMENT = "aguardando_pagamento"
    RECEIVED = "recebido"
    PREPARING = "em_preparo"
    READY_FOR_PICKUP = "pronto_retirada"
    OUT_FOR_DELIVERY = "saiu_entrega"
    DELIVERED = "entregue"
