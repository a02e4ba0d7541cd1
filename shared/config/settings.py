import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

DEFAULT_PORTS = {"products": 3001, "orders": 3002}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def build_database_url(
    host: str = "postgres-service",
    port: str = "5432",
    name: str = "ecommerce",
    user: str = "postgres",
    password: str = "postgres",
) -> str:
    return f"postgresql+asyncpg://{user}:{password}@{host}:{port}/{name}"


@dataclass(frozen=True)
class ServiceConfig:
    """Everything a service needs at construction time.

    Passed explicitly to the app factories instead of being read from
    module globals, so tests and the dev cluster can build several apps
    side by side with different targets.
    """

    service_name: str
    port: Optional[int] = None
    database_url: str = field(default_factory=build_database_url)
    inventory_url: str = "http://products-service:3001"
    adjustment_timeout: float = 5.0
    seed_catalog: bool = True
    sql_echo: bool = False
    metrics_enabled: bool = True
    otlp_endpoint: Optional[str] = None

    def __post_init__(self):
        if self.port is None:
            object.__setattr__(self, "port", DEFAULT_PORTS.get(self.service_name, 8000))

    @classmethod
    def from_env(cls, service_name: str) -> "ServiceConfig":
        load_dotenv()

        database_url = os.getenv("DATABASE_URL") or build_database_url(
            host=os.getenv("DB_HOST", "postgres-service"),
            port=os.getenv("DB_PORT", "5432"),
            name=os.getenv("DB_NAME", "ecommerce"),
            user=os.getenv("DB_USER", "postgres"),
            password=os.getenv("DB_PASSWORD", "postgres"),
        )

        return cls(
            service_name=service_name,
            port=int(os.getenv("PORT", DEFAULT_PORTS.get(service_name, 8000))),
            database_url=database_url,
            inventory_url=os.getenv("PRODUCTS_SERVICE", "http://products-service:3001"),
            adjustment_timeout=float(os.getenv("STOCK_ADJUSTMENT_TIMEOUT", "5.0")),
            seed_catalog=_env_bool("SEED_CATALOG", True),
            sql_echo=_env_bool("SQL_ECHO", False),
            metrics_enabled=_env_bool("METRICS_ENABLED", True),
            otlp_endpoint=os.getenv("OTLP_ENDPOINT") or None,
        )

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")
