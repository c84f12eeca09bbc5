from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from salonbase.config import DATABASE_URL
from salonbase.logger import get_logger

logger = get_logger(__name__)

connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    # SQLite connections are shared with the thread pool FastAPI runs sync routes in
    connect_args = {"check_same_thread": False}

engine = create_engine(DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)
logger.info(f"Database engine created for {engine.url.get_backend_name()}")

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
