import logging
from typing import Optional, Protocol, Union
import psycopg
from psycopg import AsyncConnection
from fastapi import Depends
from app.db.db import MAX_FIELD_LENGTH, get_async_conn
from app.models.user import User, UserCreate

log = logging.getLogger(__name__)

# Upper bound of the SERIAL id column
MAX_USER_ID = 2**31 - 1

class UserNotFound:
    """Result of a lookup by id that matched no stored user."""

    def __init__(self, user_id: str):
        self.user_id = user_id

    def __repr__(self):
        return f"UserNotFound(user_id={self.user_id!r})"

UserLookup = Union[User, UserNotFound]

class UserValidationError(Exception):
    def __init__(self, violations: list[str]):
        super().__init__(", ".join(violations))
        self.violations = violations

class UserRepository(Protocol):
    async def list_all(self) -> list[User]: ...

    async def find_by_id(self, user_id: str) -> UserLookup: ...

    async def find_by_email(self, email: str) -> Optional[User]: ...

    async def insert(self, candidate: UserCreate) -> User: ...

def parse_user_id(user_id: str) -> Optional[int]:
    """Convert a path identifier to a users.id value, or None if no row could ever have it."""
    if not user_id.isascii() or not user_id.isdigit():
        return None
    value = int(user_id)
    if value < 1 or value > MAX_USER_ID:
        return None
    return value

def _row_to_user(row) -> User:
    return User(id=str(row[0]), name=row[1], email=row[2])

class PostgresUserRepository:
    def __init__(self, conn: AsyncConnection):
        self.conn = conn

    async def list_all(self) -> list[User]:
        async with self.conn.cursor() as cur:
            await cur.execute("SELECT id, name, email FROM users ORDER BY id")
            rows = await cur.fetchall()
        return [_row_to_user(row) for row in rows]

    async def find_by_id(self, user_id: str) -> UserLookup:
        db_id = parse_user_id(user_id)
        if db_id is None:
            return UserNotFound(user_id)
        async with self.conn.cursor() as cur:
            await cur.execute("SELECT id, name, email FROM users WHERE id = %s", (db_id,))
            row = await cur.fetchone()
        if row:
            return _row_to_user(row)
        return UserNotFound(user_id)

    async def find_by_email(self, email: str) -> Optional[User]:
        async with self.conn.cursor() as cur:
            await cur.execute("SELECT id, name, email FROM users WHERE email = %s", (email,))
            row = await cur.fetchone()
        if row:
            return _row_to_user(row)
        return None

    async def insert(self, candidate: UserCreate) -> User:
        async with self.conn.transaction():
            async with self.conn.cursor() as cur:
                await cur.execute(
                    "INSERT INTO users (name, email) VALUES (%s, %s) RETURNING id, name, email",
                    (candidate.name, candidate.email)
                )
                row = await cur.fetchone()
        return _row_to_user(row)

async def get_user_repository(conn: AsyncConnection = Depends(get_async_conn)) -> UserRepository:
    return PostgresUserRepository(conn)

async def validate_user(repo: UserRepository, candidate: UserCreate) -> list[str]:
    violations = []
    too_long = f"is too long (maximum is {MAX_FIELD_LENGTH} characters)"
    if not candidate.name or not candidate.name.strip():
        violations.append("name can't be blank")
    elif len(candidate.name) > MAX_FIELD_LENGTH:
        violations.append(f"name {too_long}")
    if not candidate.email or not candidate.email.strip():
        violations.append("email can't be blank")
    elif len(candidate.email) > MAX_FIELD_LENGTH:
        violations.append(f"email {too_long}")
    elif await repo.find_by_email(candidate.email) is not None:
        # exact, case-sensitive match, same as the UNIQUE constraint
        violations.append("email has already been taken")
    return violations

async def create_user(repo: UserRepository, candidate: UserCreate) -> User:
    violations = await validate_user(repo, candidate)
    if violations:
        log.error(f"====== USER FAILED VALIDATION: {', '.join(violations)} ======")
        raise UserValidationError(violations)
    try:
        return await repo.insert(candidate)
    except psycopg.errors.UniqueViolation as e:
        raise UserValidationError(["email has already been taken"]) from e
