"""Database connection and initialization."""

from sqlalchemy import event
from sqlmodel import SQLModel, Session, create_engine

from cliproom.config import settings

# Import all models so SQLModel registers them
import cliproom.models  # noqa: F401

engine = create_engine(
    f"sqlite:///{settings.db_path}",
    echo=settings.debug,
    connect_args={"check_same_thread": False},
)


@event.listens_for(engine, "connect")
def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite enforces foreign keys (and ON DELETE CASCADE) per connection only
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def init_db() -> None:
    """Create all tables and enable WAL mode."""
    SQLModel.metadata.create_all(engine)

    with engine.connect() as conn:
        conn.exec_driver_sql("PRAGMA journal_mode=WAL")
        conn.exec_driver_sql("PRAGMA synchronous=NORMAL")
        conn.commit()


def get_session():
    """FastAPI dependency: yields a database session."""
    with Session(engine) as session:
        yield session
