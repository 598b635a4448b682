from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from clubhouse.config import get_database_url

DATABASE_URL = get_database_url()

connect_args = {}

if DATABASE_URL.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(
    DATABASE_URL,
    connect_args=connect_args,
    pool_pre_ping=True
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    except Exception:
        # nothing half-written by a failed request reaches the database
        db.rollback()
        raise
    finally:
        db.close()
