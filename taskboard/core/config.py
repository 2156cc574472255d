from os import getenv

class Settings:
    APP_TITLE = getenv("APP_TITLE", "Taskboard API")
    DATABASE_URL = getenv("DATABASE_URL", "sqlite:///./taskboard.db")
    PERSIST = getenv("TASKBOARD_PERSIST", "1") != "0"  # "0" = API fully in memory
    LOG_LEVEL = getenv("LOG_LEVEL", "INFO").upper()

settings = Settings()
