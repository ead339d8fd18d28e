"""
Database initialization for fresh installs.

Creates the database and user if needed, creates the schema from the
SQLAlchemy models and seeds the equipment type catalogue. Idempotent - safe
to run multiple times.

Usage:
    python -m hets.scripts.init_db

Environment variables (or .env):
    DB_HOST, DB_PORT, DB_NAME, DB_USER, DB_PASSWORD
    PG_ADMIN_USER, PG_ADMIN_PASSWORD   Credentials allowed to create databases
"""

import asyncio
import sys

import asyncpg
from dotenv import load_dotenv
from sqlalchemy.dialects.postgresql import insert

from hets.config import Settings, get_settings
from hets.database import Base, close_db, get_db_context, get_engine
from hets.models import EquipmentType

# Province-wide equipment types: (name, is_dump_truck)
EQUIPMENT_TYPES = [
    ("Backhoe", False),
    ("Dozer", False),
    ("Dump Truck", True),
    ("Excavator", False),
    ("Grader", False),
    ("Loader", False),
    ("Roller/Packer", False),
    ("Tandem Dump Truck", True),
]


async def get_admin_conn(settings: Settings) -> asyncpg.Connection:
    """Connect to the default 'postgres' database with admin credentials."""
    return await asyncpg.connect(
        host=settings.db_host,
        port=settings.db_port,
        user=settings.pg_admin_user or settings.db_user,
        password=settings.pg_admin_password or settings.db_password,
        database="postgres",
    )


async def ensure_database_exists(settings: Settings) -> bool:
    """Create database and user if they don't exist."""
    db_name = settings.db_name
    db_user = settings.db_user

    conn = await get_admin_conn(settings)
    try:
        exists = await conn.fetchval("SELECT 1 FROM pg_database WHERE datname = $1", db_name)
        if exists:
            print(f"  Database '{db_name}' already exists")
            return False

        user_exists = await conn.fetchval("SELECT 1 FROM pg_roles WHERE rolname = $1", db_user)
        if not user_exists:
            safe_pw = settings.db_password.replace("'", "''")
            await conn.execute(f"CREATE USER \"{db_user}\" WITH PASSWORD '{safe_pw}'")
            print(f"  Created user '{db_user}'")

        await conn.execute(f'CREATE DATABASE "{db_name}" OWNER "{db_user}"')
        await conn.execute(f'GRANT ALL PRIVILEGES ON DATABASE "{db_name}" TO "{db_user}"')
        print(f"  Created database '{db_name}'")
        return True

    finally:
        await conn.close()


async def create_schema() -> None:
    """Create all tables that don't exist yet."""
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("  Schema created")


async def seed_equipment_types() -> None:
    async with get_db_context() as db:
        stmt = insert(EquipmentType).values(
            [{"name": name, "is_dump_truck": dump} for name, dump in EQUIPMENT_TYPES]
        )
        await db.execute(stmt.on_conflict_do_nothing(index_elements=["name"]))
    print(f"  Seeded {len(EQUIPMENT_TYPES)} equipment types")


async def main():
    """Run database initialization."""
    load_dotenv()
    settings = get_settings()

    print("=" * 50)
    print("HETS Database Initialization")
    print("=" * 50)
    print(f"DB Host: {settings.db_host}:{settings.db_port}")

    try:
        await ensure_database_exists(settings)
        await create_schema()
        await seed_equipment_types()

        print("\n" + "=" * 50)
        print("Database initialization completed successfully!")
        print("=" * 50)

    except Exception as e:
        print(f"\nERROR: Database initialization failed: {e}")
        import traceback

        traceback.print_exc()
        sys.exit(1)

    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
