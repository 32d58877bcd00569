import logging
import os
from dotenv import load_dotenv

# Configuração de logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

# Carrega as variáveis de ambiente
load_dotenv(dotenv_path=".env", encoding="utf-8")

# Silencia logs de SQLAlchemy
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def _as_bool(value: str, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Configuration:
    def __init__(self):

        # Url base do front (retorno do checkout PIX)
        self.base_url = os.getenv("BASE_URL", "http://localhost:5173")

        # Ambiente
        self.environment = os.getenv("ENVIRONMENT", "development").lower()

        # JWT
        self.secret_key = os.getenv("SECRET_KEY", "troque-esta-chave-em-producao")
        self.jwt_expiration_hours = int(os.getenv("JWT_EXPIRATION_HOURS", 24))

        # Banco de dados (DATABASE_URL tem prioridade sobre as partes)
        self.database_url = os.getenv("DATABASE_URL")
        self.db_user = os.getenv("DB_USER")
        self.db_password = os.getenv("DB_PASSWORD")
        self.db_host = os.getenv("DB_HOST")
        self.db_port = os.getenv("DB_PORT", "5432")
        self.db_name = os.getenv("DB_NAME")

        # AbacatePay
        self.abacatepay_api_key = os.getenv("ABACATEPAY_API_KEY")
        self.abacatepay_base_url = os.getenv("ABACATEPAY_BASE_URL", "https://api.abacatepay.com")
        self.abacatepay_webhook_secret = os.getenv("ABACATEPAY_WEBHOOK_SECRET")
        self.abacatepay_timeout = int(os.getenv("ABACATEPAY_TIMEOUT", 20))

        # Pedido
        self.delivery_fee = float(os.getenv("DELIVERY_FEE", 8))
        self.estimated_delivery_minutes = int(os.getenv("ESTIMATED_DELIVERY_MINUTES", 45))
        self.estimated_pickup_minutes = int(os.getenv("ESTIMATED_PICKUP_MINUTES", 30))
        self.pix_reconcile_window_minutes = int(os.getenv("PIX_RECONCILE_WINDOW_MINUTES", 60))

        # Usuários criados na carga inicial
        self.admin_email = os.getenv("ADMIN_EMAIL", "admin@pizzaria.com")
        self.admin_password = os.getenv("ADMIN_PASSWORD", "admin123")
        self.employee_email = os.getenv("EMPLOYEE_EMAIL", "funcionario@pizzaria.com")
        self.employee_password = os.getenv("EMPLOYEE_PASSWORD", "func123")

        # Sistema
        self.cors_origins = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
            if origin.strip()
        ]
        self.scheduler_enabled = _as_bool(os.getenv("SCHEDULER_ENABLED"), default=True)
        self.seed_database = _as_bool(os.getenv("SEED_DATABASE"), default=True)

    def connect_to_database(self) -> str:
        if self.database_url:
            logging.info("BANCO DE DADOS >>> Usando DATABASE_URL")
            return self.database_url

        if self.db_host:
            db_url = f"postgresql://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"
            logging.info(f"BANCO DE DADOS >>> SELECIONADO POSTGRES -> {self.db_host}:{self.db_port}/{self.db_name}")
            return db_url

        logging.info("BANCO DE DADOS >>> SELECIONADO SQLITE LOCAL -> pizzaria.db")
        return "sqlite:///pizzaria.db"
