from typing import Generator

from fastapi_sqlalchemy import db
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from app.core.config import settings

connect_args = {'check_same_thread': False} if settings.DATABASE_URL.startswith('sqlite') else {}
engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)


def get_db() -> Generator[Session, None, None]:
    """Yield the request scoped session opened by DBSessionMiddleware."""
    yield db.session
