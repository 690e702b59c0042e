import os


class Settings:
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "certif-revision")
    MONGO_URL: str = os.getenv("MONGO_URL", "mongodb://mongodb:27017/certif_revision")
    MONGO_DB: str = os.getenv("MONGO_DB", "certif_revision")

    JWT_SECRET: str = os.getenv("JWT_SECRET", "dev-secret-change-me")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRES_MINUTES: int = int(os.getenv("JWT_EXPIRES_MINUTES", 60 * 24 * 7))

    STARTING_LIVES: int = int(os.getenv("STARTING_LIVES", 5))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS: list = os.getenv("CORS_ORIGINS", "*").split(",")


settings = Settings()
