from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from preplanner.core.config import settings
from preplanner.db.base import Base
from preplanner.db import models  # noqa: F401

engine = create_async_engine(settings.DATABASE_URL, echo=False)
SessionLocal = async_sessionmaker(engine, expire_on_commit=False)

async def init_db(bind=engine):
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

async def get_session():
    async with SessionLocal() as db:
        yield db
