from pizzaria.enums.delivery_type import DeliveryType
from pizzaria.enums.payment_method import PaymentMethod
from pizzaria.helpers.order.formatters import format_brazilian_date, format_currency
from pizzaria.helpers.order.status_flow import ORDER_STATUS_PT
from pizzaria.models.order.order import Order

TICKET_WIDTH = 32

PAYMENT_METHODS_PT = {
    PaymentMethod.PIX: "PIX",
    PaymentMethod.CREDIT: "CARTÃO CRÉDITO",
    PaymentMethod.DEBIT: "CARTÃO DÉBITO",
    PaymentMethod.CASH: "DINHEIRO",
}


def build_order_ticket(order: Order) -> str:
    """Monta a comanda em texto puro para a impressora térmica da cozinha."""
    line = "-" * TICKET_WIDTH
    double = "=" * TICKET_WIDTH
    customer = order.customer or {}

    lines = [double, f"{'COMANDA Nº ' + order.code:^{TICKET_WIDTH}}", double]
    lines.append(f"Data: {format_brazilian_date(order.created_at)}")
    lines.append(f"Status: {ORDER_STATUS_PT.get(order.status, order.status.value).upper()}")
    lines.append(line)

    # Cliente
    lines.append(f"CLIENTE: {customer.get('name') or 'Não informado'}")
    lines.append(f"TEL: {customer.get('phone') or 'Não informado'}")

    address = customer.get("address")
    if order.delivery_type == DeliveryType.DELIVERY and address:
        lines.append(line)
        lines.append("ENTREGA:")
        lines.append(f"{address.get('street')}, {address.get('number')}")
        if address.get("complement"):
            lines.append(f"Comp: {address['complement']}")
        lines.append(f"{address.get('neighborhood')}")
        if address.get("city"):
            lines.append(f"{address['city']}")
        if address.get("cep"):
            lines.append(f"CEP {address['cep']}")
    else:
        lines.append(line)
        lines.append("RETIRADA NA LOJA")

    lines.append(double)
    lines.append(f"{'ITENS DO PEDIDO':^{TICKET_WIDTH}}")
    lines.append(double)

    for item in order.items:
        lines.append(f"{item['quantity']}x {item['name'][:TICKET_WIDTH - 4]}")
        if item.get("kind") == "pizza":
            lines.append(f"  {item['description']}")
        if item.get("notes"):
            lines.append(f"  Obs: {item['notes'][:TICKET_WIDTH - 7]}")
        lines.append(f"  {format_currency(item['total_price'])}")
        lines.append(line)

    lines.append(f"Subtotal: {format_currency(order.subtotal)}")
    if order.delivery_fee:
        lines.append(f"Entrega: +{format_currency(order.delivery_fee)}")
    lines.append(double)
    lines.append(f"TOTAL: {format_currency(order.total)}")

    lines.append(f"Pagamento: {PAYMENT_METHODS_PT.get(order.payment_method, order.payment_method.value.upper())}")
    if order.payment_method == PaymentMethod.CASH and order.change:
        lines.append(f"Troco p/: {format_currency(order.change)}")
        lines.append(f"Troco: {format_currency(max(order.change - order.total, 0))}")

    lines.append(double)
    lines.append(f"{'OBRIGADO PELA PREFERÊNCIA!':^{TICKET_WIDTH}}")
    lines.append(double)
    return "\n".join(lines)
