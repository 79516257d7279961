"""
db/init_db.py
-------------
Drops and recreates the sample tables (`info`, `users`) and seeds them
with fixed rows. Safe to run repeatedly: every run starts from empty tables.
Run this module directly to reset the database:
    python -m db.init_db
"""

import sys

import psycopg2

from db.connection import execute, execute_batch, pooled
from utils.formatting import format_recordset
from utils.logger import get_logger

logger = get_logger(__name__)

# CASCADE also removes the get_info_by_name function, whose return type is info.
DROP_INFO_SQL = "DROP TABLE IF EXISTS info CASCADE;"

CREATE_INFO_SQL = """
CREATE TABLE info (
    id      SERIAL PRIMARY KEY,
    name    VARCHAR(50) NOT NULL
);
"""

DROP_USERS_SQL = "DROP TABLE IF EXISTS users CASCADE;"

CREATE_USERS_SQL = """
CREATE TABLE users (
    id              SERIAL PRIMARY KEY,
    name            VARCHAR(50) NOT NULL,
    email           VARCHAR(100),
    created_date    TIMESTAMP DEFAULT NOW()
);
"""

SEED_INFO_NAMES = [
    "John Doe",
    "Jane Smith",
    "Mike Johnson",
    "Sarah Williams",
    "Robert Brown",
    "Emily Davis",
    "Michael Wilson",
    "Jessica Martinez",
    "David Anderson",
    "Jennifer Taylor",
]

SEED_USERS = [
    ("Alice Johnson", "alice.j@example.com"),
    ("Bob Smith", "bob.smith@example.com"),
    ("Charlie Brown", "charlie.b@example.com"),
    ("Diana Prince", "diana.p@example.com"),
    ("Edward Norton", "edward.n@example.com"),
]

TROUBLESHOOTING = [
    "PostgreSQL is running and reachable",
    "The target database exists",
    "You have permissions to create tables",
    "Connection settings in .env are correct",
]


def create_tables(db_pool) -> None:
    """Drop and recreate both tables and seed them."""
    print('Creating "info" table...')
    execute(db_pool, DROP_INFO_SQL)
    execute(db_pool, CREATE_INFO_SQL)
    print('✓ "info" table created\n')

    print('Inserting sample data into "info" table...')
    inserted = execute_batch(
        db_pool, "INSERT INTO info (name) VALUES %s", [(n,) for n in SEED_INFO_NAMES]
    )
    print(f'✓ Inserted {inserted} records into "info" table\n')

    print('Creating "users" table...')
    execute(db_pool, DROP_USERS_SQL)
    execute(db_pool, CREATE_USERS_SQL)
    print('✓ "users" table created\n')

    print('Inserting sample data into "users" table...')
    inserted = execute_batch(db_pool, "INSERT INTO users (name, email) VALUES %s", SEED_USERS)
    print(f'✓ Inserted {inserted} records into "users" table\n')


def table_counts(db_pool) -> dict[str, int]:
    """Return the row count of each sample table."""
    counts = {}
    for table in ("info", "users"):
        row = execute(db_pool, f"SELECT COUNT(*) AS count FROM {table};").first()
        counts[table] = int(row["count"])
    return counts


def show_samples(db_pool, limit: int = 5) -> None:
    """Print the first rows of each sample table."""
    for table in ("info", "users"):
        print(f'\nSample data from "{table}" table:')
        rows = execute(
            db_pool, f"SELECT * FROM {table} ORDER BY id LIMIT %(limit)s::integer;", {"limit": limit}
        ).recordset
        print(format_recordset(rows))


def setup_database() -> bool:
    """
    Reset and seed the sample tables, then verify and display them.

    Returns:
        True on success, False if any step failed.
    """
    print("Starting database setup...\n")
    try:
        with pooled() as db_pool:
            print("✓ Connected to database successfully\n")
            create_tables(db_pool)

            print("Verifying data...\n")
            counts = table_counts(db_pool)
            for table, count in counts.items():
                print(f'✓ "{table}" table has {count} records')

            show_samples(db_pool)
    except psycopg2.Error as e:
        logger.error(f"Database setup failed: {e}")
        print("\nPlease check:")
        for i, hint in enumerate(TROUBLESHOOTING, start=1):
            print(f"  {i}. {hint}")
        print()
        return False

    logger.info("Database schema initialized successfully.")
    print("\n========================================")
    print("✓ Database setup completed successfully!")
    print("========================================")
    print("\nYou can now run:")
    print("  dbexamples-query - Run basic query")
    print("  dbexamples-run   - Run all examples\n")
    return True


def main() -> None:
    """Console entry point; exits non-zero when setup fails."""
    if not setup_database():
        sys.exit(1)


if __name__ == "__main__":
    main()
