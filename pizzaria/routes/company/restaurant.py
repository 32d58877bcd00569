from datetime import datetime, timezone
import logging

from fastapi import APIRouter, Depends
from sqlmodel import Session, select

from pizzaria.core.middlewares.users import require_employee
from pizzaria.database.connection import get_session
from pizzaria.models.company.restaurant_settings import RestaurantSettings
from pizzaria.models.user.user import User
from pizzaria.schemas.company.restaurant import RestaurantStatusResponse, RestaurantStatusUpdate
from pizzaria.tasks.websockets.notifications import notify_restaurant_status

db_session = get_session


def get_restaurant_settings(session: Session) -> RestaurantSettings:
    """Linha única de configuração da loja; criada aberta se ainda não existir."""
    settings = session.exec(select(RestaurantSettings).order_by(RestaurantSettings.id)).first()
    if not settings:
        settings = RestaurantSettings(is_open=True)
        session.add(settings)
        session.commit()
        session.refresh(settings)
    return settings


def _status_response(settings: RestaurantSettings) -> RestaurantStatusResponse:
    return RestaurantStatusResponse(
        is_open=settings.is_open,
        updated_at=settings.updated_at,
        message="Estamos abertos!" if settings.is_open else "Estamos fechados no momento",
    )


class RestaurantRouter(APIRouter):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.prefix = "/restaurant"
        self.tags = ["restaurant"]

        self.add_api_route("/status", self.get_status, methods=["GET"], response_model=RestaurantStatusResponse)
        self.add_api_route("/status", self.set_status, methods=["PUT"], response_model=RestaurantStatusResponse)
        self.add_api_route("/status/toggle", self.toggle_status, methods=["POST"], response_model=RestaurantStatusResponse)
        self.add_api_route("/health", self.health, methods=["GET"], response_model=dict)

    def get_status(self, session: Session = Depends(db_session)):
        return _status_response(get_restaurant_settings(session))

    async def _apply(self, session: Session, settings: RestaurantSettings, is_open: bool, user: User):
        settings.is_open = is_open
        settings.updated_at = datetime.now(timezone.utc)
        session.add(settings)
        session.commit()
        session.refresh(settings)

        logging.info(f"SISTEMA >>> Loja {'ABERTA' if is_open else 'FECHADA'} por {user.id}")
        await notify_restaurant_status(settings.is_open)
        return _status_response(settings)

    async def set_status(
        self,
        data: RestaurantStatusUpdate,
        current_user: User = Depends(require_employee),
        session: Session = Depends(db_session),
    ):
        settings = get_restaurant_settings(session)
        return await self._apply(session, settings, data.is_open, current_user)

    async def toggle_status(self, current_user: User = Depends(require_employee), session: Session = Depends(db_session)):
        settings = get_restaurant_settings(session)
        return await self._apply(session, settings, not settings.is_open, current_user)

    def health(self):
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
