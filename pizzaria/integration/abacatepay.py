import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from pizzaria.configuration.settings import Configuration
from pizzaria.enums.billing_status import BillingStatus, is_paid_status

configuration = Configuration()


class AbacatePayError(Exception):
    """Falha ao falar com a AbacatePay (rede, HTTP ou resposta inesperada)."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


@dataclass
class Billing:
    id: str
    url: str
    status: str
    amount: int
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_paid(self) -> bool:
        return is_paid_status(self.status)


class AbacatePayClient:
    """Cliente HTTP da API v1 da AbacatePay."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key or configuration.abacatepay_api_key
        self.base_url = (base_url or configuration.abacatepay_base_url).rstrip("/")
        self.timeout = timeout or configuration.abacatepay_timeout
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, json: Optional[dict] = None) -> Dict[str, Any]:
        if not self.api_key:
            raise AbacatePayError("ABACATEPAY_API_KEY não configurada")

        url = f"{self.base_url}{path}"
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            response = self.session.request(method, url, json=json, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logging.error(f"ABACATEPAY >>> Erro de comunicação em {method} {path} -> {e}")
            raise AbacatePayError("Erro ao se comunicar com a AbacatePay") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if response.status_code >= 400:
            logging.error(f"ABACATEPAY >>> {method} {path} respondeu {response.status_code}: {data}")
            message = (data or {}).get("error") if isinstance(data, dict) else None
            raise AbacatePayError(message or "AbacatePay recusou a requisição", response.status_code, data)

        if not isinstance(data, dict):
            raise AbacatePayError("Resposta inválida da AbacatePay", response.status_code, data)

        if data.get("error"):
            logging.error(f"ABACATEPAY >>> {method} {path} retornou erro: {data['error']}")
            raise AbacatePayError(str(data["error"]), response.status_code, data)

        return data

    def create_billing(
        self,
        *,
        order_id: int,
        order_code: str,
        amount: float,
        customer: Dict[str, str],
        products: Optional[List[Dict[str, Any]]] = None,
    ) -> Billing:
        """
        Cria uma cobrança PIX única. Valores são enviados em centavos.

        `customer` precisa de name, cellphone, email e taxId (CPF).
        """
        amount_cents = int(round(amount * 100))
        body = {
            "frequency": "ONE_TIME",
            "methods": ["PIX"],
            "products": products or [
                {
                    "externalId": str(order_id),
                    "name": f"Pedido #{order_code}",
                    "description": f"Pedido #{order_code}",
                    "quantity": 1,
                    "price": amount_cents,
                }
            ],
            "returnUrl": f"{configuration.base_url}/checkout",
            "completionUrl": f"{configuration.base_url}/pedido/{order_id}",
            "customer": customer,
        }

        logging.info(f"ABACATEPAY >>> Criando cobrança para o pedido {order_id} ({amount_cents} centavos)")
        data = self._request("POST", "/v1/billing/create", json=body)

        billing = data.get("data") or {}
        if not billing.get("id") or not billing.get("url"):
            raise AbacatePayError("Cobrança criada sem id ou url", payload=data)

        logging.info(f"ABACATEPAY >>> Cobrança {billing['id']} criada para o pedido {order_id}")
        return Billing(
            id=billing["id"],
            url=billing["url"],
            status=billing.get("status", BillingStatus.PENDING.value),
            amount=billing.get("amount", amount_cents),
            raw=data,
        )

    def get_billing_status(self, billing_id: str) -> str:
        data = self._request("GET", f"/v1/billing/status/{billing_id}")
        logging.info(f"ABACATEPAY >>> Status da cobrança {billing_id}: {data}")

        inner = data.get("data")
        status = (inner or {}).get("status") if isinstance(inner, dict) else None
        return (status or data.get("status") or BillingStatus.PENDING.value).upper()


def get_abacatepay_client() -> AbacatePayClient:
    return AbacatePayClient()
