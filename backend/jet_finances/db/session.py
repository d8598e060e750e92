"""
Database session management.
"""
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, Session
from jet_finances.core.config import settings
from jet_finances.db.base import Base

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    pool_pre_ping=True,
    pool_recycle=3600
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Initialize database tables."""
    # Import models so every table is registered on Base.metadata
    import jet_finances.models  # noqa: F401
    Base.metadata.create_all(bind=engine)


def check_database(db: Session) -> bool:
    """Run a trivial query to confirm the database answers."""
    return db.execute(text("SELECT 1")).scalar() == 1
