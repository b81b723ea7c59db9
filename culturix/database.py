# culturix/database.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from culturix.config import DATABASE_URL
from culturix.models import Base
from culturix.models import user, log, session  # noqa: F401  register tables


connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


def init_db(bind=None):
    Base.metadata.create_all(bind=bind or engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
