from typing import Optional
import pytest
from fastapi.testclient import TestClient
from app.main import app
from app.models.user import User, UserCreate
from app.services.user_service import UserLookup, UserNotFound, get_user_repository, parse_user_id

class InMemoryUserRepository:
    def __init__(self):
        self.users: dict[str, User] = {}
        self.next_id = 1

    async def list_all(self) -> list[User]:
        return list(self.users.values())

    async def find_by_id(self, user_id: str) -> UserLookup:
        db_id = parse_user_id(user_id)
        if db_id is None:
            return UserNotFound(user_id)
        return self.users.get(str(db_id), UserNotFound(user_id))

    async def find_by_email(self, email: str) -> Optional[User]:
        for user in self.users.values():
            if user.email == email:
                return user
        return None

    async def insert(self, candidate: UserCreate) -> User:
        user = User(id=str(self.next_id), name=candidate.name, email=candidate.email)
        self.users[user.id] = user
        self.next_id += 1
        return user

@pytest.fixture
def repo():
    return InMemoryUserRepository()

@pytest.fixture
def client(repo):
    app.dependency_overrides[get_user_repository] = lambda: repo
    # no context manager: the lifespan would try to reach Postgres
    yield TestClient(app)
    app.dependency_overrides.clear()
