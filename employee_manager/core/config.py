import sys

from pydantic_settings import BaseSettings

_ENV_FILE = None if "pytest" in sys.modules else ".env"


class Settings(BaseSettings):
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    COSMOS_DB_ENDPOINT: str = ""
    COSMOS_DB_KEY: str = ""
    COSMOS_DB_DATABASE: str = "employee-manager"
    COSMOS_DB_EMPLOYEES_CONTAINER: str = "employees"

    FIREBASE_API_KEY: str = ""
    FIREBASE_PROJECT_ID: str = ""

    AUTH_BOOTSTRAP_TIMEOUT_SECONDS: float = 3.0
    MIN_SALARY: int = 20000

    model_config = {
        "env_file": _ENV_FILE,
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }


settings = Settings()
