import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from pizzaria.configuration.settings import Configuration

configuration = Configuration()


def _build_engine():
    db_url = configuration.connect_to_database()

    if db_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # Banco em memória precisa de uma única conexão compartilhada
        if db_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(db_url, **kwargs)

    return create_engine(db_url, pool_pre_ping=True)


engine = _build_engine()


def get_session() -> Iterator[Session]:
    with Session(engine) as session:
        yield session


@contextmanager
def session_scope() -> Iterator[Session]:
    """Sessão para jobs em background, fora do ciclo de requisição."""
    session = Session(engine)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db():
    # Registra todas as tabelas no metadata
    import pizzaria.models  # noqa: F401
    from pizzaria.database.populate import populate_database

    SQLModel.metadata.create_all(engine)
    logging.info("BANCO DE DADOS >>> Tabelas criadas/verificadas")

    if configuration.seed_database:
        with Session(engine) as session:
            populate_database(session)
        logging.info("BANCO DE DADOS >>> Dados iniciais verificados")
