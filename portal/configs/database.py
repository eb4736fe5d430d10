import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError, StatementError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from portal.errors import InfrastructureError, ValidationError

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str, echo: bool = False):
    kwargs = {}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # one shared connection, otherwise every session sees an empty database
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
    return create_engine(database_url, echo=echo, **kwargs)


def init_db(engine):
    # table models register themselves on import
    import portal.models  # noqa: F401
    SQLModel.metadata.create_all(engine)


@contextmanager
def session_scope(engine):
    """Yield a short-lived session, translating driver failures into portal errors."""
    try:
        with Session(engine) as session:
            yield session
    except IntegrityError as e:
        logger.info(f"Integrity violation: {e.orig}")
        raise ValidationError("Record conflicts with an existing entry") from e
    except (OperationalError, InterfaceError) as e:
        logger.error(f"Database unavailable: {e}")
        raise InfrastructureError() from e
    except StatementError as e:
        # values the driver could not bind
        logger.error(f"Statement failed: {e}")
        raise InfrastructureError() from e
