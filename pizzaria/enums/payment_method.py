from enum import Enum

class PaymentMethod(str, Enum):
    PIX = "pix"
    CREDIT = "credito"   # Na maquininha
    DEBIT = "debito"     # Na maquininha
    CASH = "dinheiro"
