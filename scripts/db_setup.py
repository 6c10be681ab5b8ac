#!/usr/bin/env python
"""
db_setup.py

Script to create the PostgreSQL role, database and tables for the ProConnect
API. It reads database credentials from a .env file located at the project
root or in backend/.

Required .env variables:
  DB_SUPERUSER_PASSWORD
  DB_USER
  DB_PASSWORD

Optional:
  DB_HOST (default 127.0.0.1), DB_PORT (default 5432),
  DB_SUPERUSER (default postgres), DB_NAME (default proconnect)

Usage:
  python scripts/db_setup.py          # create role, database and tables if missing
  python scripts/db_setup.py --reset  # drop and recreate the database first
"""
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
import psycopg2
from psycopg2 import sql
from psycopg2.extensions import ISOLATION_LEVEL_AUTOCOMMIT
from sqlalchemy import create_engine

# Load environment variables from .env at project root, then backend/.env
project_root = Path(__file__).resolve().parent.parent
for dotenv_path in (project_root / '.env', project_root / 'backend' / '.env'):
    if dotenv_path.exists():
        print(f"Loading .env from: {dotenv_path}")
        load_dotenv(dotenv_path)

# Database configuration from env
DB_HOST = os.getenv('DB_HOST', '127.0.0.1')
DB_PORT = os.getenv('DB_PORT', '5432')
SUPERUSER = os.getenv('DB_SUPERUSER', 'postgres')
SUPERUSER_PASSWORD = os.getenv('DB_SUPERUSER_PASSWORD')
DB_USER = os.getenv('DB_USER')
DB_PASSWORD = os.getenv('DB_PASSWORD')
DB_NAME = os.getenv('DB_NAME', 'proconnect')

RESET = '--reset' in sys.argv[1:]


def connect(dbname):
    conn = psycopg2.connect(
        dbname=dbname,
        user=SUPERUSER,
        password=SUPERUSER_PASSWORD,
        host=DB_HOST,
        port=DB_PORT
    )
    conn.set_isolation_level(ISOLATION_LEVEL_AUTOCOMMIT)
    return conn


def grant_privileges(cur, db_name, db_user):
    """Grant the application role what it needs on the public schema."""
    print("\nGranting privileges...")
    user = sql.Identifier(db_user)
    privilege_commands = [
        sql.SQL("GRANT ALL PRIVILEGES ON DATABASE {} TO {}").format(sql.Identifier(db_name), user),
        sql.SQL("GRANT ALL ON SCHEMA public TO {}").format(user),
        sql.SQL("GRANT ALL PRIVILEGES ON ALL TABLES IN SCHEMA public TO {}").format(user),
        sql.SQL("GRANT ALL PRIVILEGES ON ALL SEQUENCES IN SCHEMA public TO {}").format(user),
        sql.SQL("ALTER DEFAULT PRIVILEGES IN SCHEMA public GRANT ALL PRIVILEGES ON TABLES TO {}").format(user),
        sql.SQL("ALTER DEFAULT PRIVILEGES IN SCHEMA public GRANT ALL PRIVILEGES ON SEQUENCES TO {}").format(user),
    ]

    for command in privilege_commands:
        try:
            cur.execute(command)
        except psycopg2.Error as e:
            print(f"Warning while executing '{command.as_string(cur)}': {e}")


def setup_database():
    """Create the role and database, dropping the database first with --reset."""
    print(f"\nConnecting to PostgreSQL at {DB_HOST}:{DB_PORT} as {SUPERUSER}...")
    try:
        conn = connect('postgres')
        cur = conn.cursor()

        cur.execute("SELECT 1 FROM pg_roles WHERE rolname = %s", (DB_USER,))
        if cur.fetchone():
            print(f"User '{DB_USER}' already exists.")
        else:
            cur.execute(
                sql.SQL("CREATE USER {} WITH PASSWORD %s").format(sql.Identifier(DB_USER)),
                (DB_PASSWORD,)
            )
            print(f"User '{DB_USER}' created.")

        if RESET:
            cur.execute("""
                SELECT pg_terminate_backend(pg_stat_activity.pid)
                FROM pg_stat_activity
                WHERE pg_stat_activity.datname = %s
                AND pid <> pg_backend_pid();
            """, (DB_NAME,))
            cur.execute(sql.SQL("DROP DATABASE IF EXISTS {}").format(sql.Identifier(DB_NAME)))
            print(f"Dropped existing database '{DB_NAME}'.")

        cur.execute("SELECT 1 FROM pg_database WHERE datname = %s", (DB_NAME,))
        if cur.fetchone():
            print(f"Database '{DB_NAME}' already exists.")
        else:
            cur.execute(
                sql.SQL("CREATE DATABASE {} WITH OWNER = {}").format(
                    sql.Identifier(DB_NAME), sql.Identifier(DB_USER)
                )
            )
            print(f"Database '{DB_NAME}' created.")

        cur.close()
        conn.close()

        conn = connect(DB_NAME)
        cur = conn.cursor()
        grant_privileges(cur, DB_NAME, DB_USER)
        cur.close()
        conn.close()
        return True

    except psycopg2.Error as e:
        print(f"Error in database setup: {e}")
        return False


def create_tables():
    """Create all tables from the ORM metadata (for setups without Alembic)."""
    print("\nCreating tables...")
    sys.path.insert(0, str(project_root / 'backend'))

    from proconnect.db.models import Base

    db_url = f"postgresql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
    print(f"Connecting with URL: postgresql://{DB_USER}:***@{DB_HOST}:{DB_PORT}/{DB_NAME}")
    engine = create_engine(db_url)
    try:
        Base.metadata.create_all(bind=engine)
    finally:
        engine.dispose()
    print(f"Created tables: {', '.join(sorted(Base.metadata.tables))}")
    return True


if __name__ == '__main__':
    if not all([SUPERUSER_PASSWORD, DB_USER, DB_PASSWORD]):
        print("ERROR: Missing one of DB_SUPERUSER_PASSWORD, DB_USER, or DB_PASSWORD in .env")
        sys.exit(1)

    print("=== Setting up database and user ===")
    if not setup_database():
        print("\nFailed to setup database. Please check your PostgreSQL connection and credentials.")
        sys.exit(1)

    print("\n=== Creating tables ===")
    create_tables()
    print("\nDatabase setup completed successfully!")
