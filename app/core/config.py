from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()

class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql://localhost:5432/users"
    LOG_LEVEL: str = "DEBUG"
    APP_TITLE: str = "USERS API"

settings = Settings()
