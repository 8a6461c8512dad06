from logging.config import fileConfig
from sqlalchemy import pool
from alembic import context

from foodtrack.config import get_settings, normalize_database_url
from foodtrack.database import Base, build_engine
import foodtrack.models  # noqa: F401  ensure all models are imported

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

settings = get_settings()

target_metadata = Base.metadata


def run_migrations_offline():
    context.configure(
        url=normalize_database_url(settings.DATABASE_URL),
        target_metadata=target_metadata,
        literal_binds=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    connectable = build_engine(settings.DATABASE_URL, poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
