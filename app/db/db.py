from psycopg import AsyncConnection
from app.core.config import settings

DB_URL = settings.DATABASE_URL

# Bound of the VARCHAR columns on users
MAX_FIELD_LENGTH = 256

async def connect_async(db_url: str = DB_URL) -> AsyncConnection:
    # autocommit so each `conn.transaction()` block is a real BEGIN/COMMIT, even after a plain SELECT
    return await AsyncConnection.connect(db_url, autocommit=True)

async def init_db(conn: AsyncConnection):
    async with conn.transaction():
        async with conn.cursor() as cur:
            await cur.execute(f"""
            CREATE TABLE IF NOT EXISTS users (
                id SERIAL PRIMARY KEY,
                name VARCHAR({MAX_FIELD_LENGTH}) NOT NULL CHECK (name <> ''),
                email VARCHAR({MAX_FIELD_LENGTH}) NOT NULL UNIQUE CHECK (email <> '')
            );
            """)

# Consider implementing connection pooling
async def get_async_conn():
    conn = await connect_async()
    try:
        yield conn
    finally:
        await conn.close()
