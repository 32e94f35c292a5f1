import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker

from preplanner.agent.projects import ProjectValidationError, register_project
from preplanner.db.repo import get_project
from preplanner.db.session import init_db


@pytest.mark.asyncio
async def test_register_project_is_immutable(db_engine):
    await init_db(db_engine)
    maker = async_sessionmaker(db_engine, expire_on_commit=False)

    async with maker() as db:
        pid = await register_project(db, name="Shop", tech="react_ts", project_id="p-1")
        again = await register_project(db, name="Other name", tech="react_ts", project_id="p-1")
        stored = await get_project(db, "p-1")

    assert pid == again == "p-1"
    assert stored.name == "Shop"
    assert stored.tech == "react_ts"
    await db_engine.dispose()


@pytest.mark.asyncio
async def test_register_project_mints_distinct_ids(db_engine):
    await init_db(db_engine)
    maker = async_sessionmaker(db_engine, expire_on_commit=False)

    async with maker() as db:
        a = await register_project(db, name="A", tech="react_ts")
        b = await register_project(db, name="B", tech="react_ts")

    assert a != b
    await db_engine.dispose()


@pytest.mark.asyncio
@pytest.mark.parametrize("name,tech", [(None, "react_ts"), ("", "react_ts"), ("Shop", None), ("Shop", "vue")])
async def test_register_project_validation(db_engine, name, tech):
    maker = async_sessionmaker(db_engine, expire_on_commit=False)
    async with maker() as db:
        with pytest.raises(ProjectValidationError):
            await register_project(db, name=name, tech=tech)
