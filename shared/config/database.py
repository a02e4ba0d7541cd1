from typing import AsyncIterator, Iterable

from fastapi import Request
from sqlalchemy import Table, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from .settings import ServiceConfig

# Each service keeps its tables in its own schema to simulate microservice isolation
SERVICE_SCHEMAS = ("product_schema", "order_schema")

Base = declarative_base()


def build_engine(config: ServiceConfig) -> AsyncEngine:
    options = {}
    if config.is_sqlite:
        # SQLite has no schemas; render every table unqualified
        options["schema_translate_map"] = {schema: None for schema in SERVICE_SCHEMAS}
    return create_async_engine(config.database_url, echo=config.sql_echo, execution_options=options)


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_tables(engine: AsyncEngine, schema: str, tables: Iterable[Table]):
    """Idempotently create a service's schema and tables."""
    async with engine.begin() as conn:
        if conn.dialect.name == "postgresql":
            await conn.execute(text(f"CREATE SCHEMA IF NOT EXISTS {schema}"))
        await conn.run_sync(Base.metadata.create_all, tables=list(tables))


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    async with request.app.state.sessionmaker() as session:
        yield session
