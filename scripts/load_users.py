import asyncio
import logging
import sys
import pandas as pd
from app.db.db import connect_async
from app.core.config import settings
from app.models.user import UserCreate
from app.services.user_service import UserRepository, PostgresUserRepository, UserValidationError, create_user

class UserLoader:
    def __init__(self, repo: UserRepository):
        self.repo = repo
        self.inserted = 0
        self.skipped = 0
        self.logger = logging.getLogger(__name__)
        self.logger.setLevel(logging.DEBUG)
        if not self.logger.handlers:
            stream_handler = logging.StreamHandler(sys.stdout)
            log_formatter = logging.Formatter("%(asctime)s [%(processName)s: %(process)d] [%(threadName)s: %(thread)d] [%(levelname)s] %(name)s: %(message)s")
            stream_handler.setFormatter(log_formatter)
            self.logger.addHandler(stream_handler)

    async def load_frame(self, df: pd.DataFrame):
        # blank cells come back as NaN, treat them as empty strings so validation rejects them
        df = df.fillna("")
        for _, row in df.iterrows():
            candidate = UserCreate(name=str(row['name']), email=str(row['email']))
            try:
                user = await create_user(self.repo, candidate)
            except UserValidationError as e:
                self.logger.error(f"====== SKIPPING USER {candidate.email!r}: {', '.join(e.violations)} ======")
                self.skipped += 1
                continue
            self.logger.info(f"====== STORED USER WITH ID: {user.id} ======")
            self.inserted += 1
        self.logger.info(f"====== INSERTED {self.inserted} USERS, SKIPPED {self.skipped} ======")

    async def load_csv(self, path: str):
        self.logger.info(f"====== LOADING USERS FROM {path} ======")
        await self.load_frame(pd.read_csv(path, dtype=str, keep_default_na=False))

async def main(path: str):
    conn = await connect_async(settings.DATABASE_URL)
    try:
        loader = UserLoader(PostgresUserRepository(conn))
        await loader.load_csv(path)
    finally:
        await conn.close()

if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("usage: python -m scripts.load_users <users.csv>")
        sys.exit(1)
    asyncio.run(main(sys.argv[1]))
