import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from pizzaria.configuration.settings import Configuration
from pizzaria.core.exceptions.app_exception import (
    AppHttpException,
    app_http_exception_handler,
    validation_exception_handler,
)
from pizzaria.database.connection import init_db
from pizzaria.functions.scheduler.scheduler import start_scheduler

from pizzaria.auth.auth import AuthRouter
from pizzaria.admin.admin import AdminRouter

from pizzaria.routes.user.profile import ProfileRouter
from pizzaria.routes.company.restaurant import RestaurantRouter
from pizzaria.routes.product.menu import MenuRouter
from pizzaria.routes.cart.cart import CartRouter
from pizzaria.routes.order.order import OrderRouter
from pizzaria.routes.order.staff import StaffRouter
from pizzaria.routes.payment.payment import PaymentRouter
from pizzaria.routes.review import ReviewRouter

from pizzaria.tasks.websockets import routes as websocket_routes
from pizzaria.tasks.websockets.notifications import bind_event_loop

configuration = Configuration()

logging.info(f"SISTEMA >>> Ambiente carregado: {configuration.environment}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Jobs do agendador publicam nos websockets através deste loop
    bind_event_loop(asyncio.get_running_loop())

    scheduler = start_scheduler() if configuration.scheduler_enabled else None
    app.state.scheduler = scheduler

    yield

    if scheduler is not None:
        scheduler.shutdown(wait=False)
        logging.info("SISTEMA >>> Agendador encerrado")
    bind_event_loop(None)


def create_app():
    """
    Cria e configura a aplicação FastAPI, incluindo middlewares e rotas.
    """
    app = FastAPI(title="Pizzaria API", lifespan=lifespan)

    logging.info("SISTEMA >>> Inicializando o banco de dados...")
    init_db()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=configuration.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppHttpException, app_http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(AuthRouter())
    app.include_router(AdminRouter())

    app.include_router(ProfileRouter())
    app.include_router(RestaurantRouter())
    app.include_router(MenuRouter())
    app.include_router(CartRouter())
    app.include_router(OrderRouter())
    app.include_router(StaffRouter())
    app.include_router(PaymentRouter())
    app.include_router(ReviewRouter())

    app.include_router(websocket_routes.router)

    return app
