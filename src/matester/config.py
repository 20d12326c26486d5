import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load the appropriate .env file on module import
env = os.environ.get("MATESTER_ENV", "development").lower()
env_file = f".env.{env}"
if os.path.exists(env_file):
    load_dotenv(env_file)
else:
    # Fall back to the default .env file
    load_dotenv()


@dataclass
class Config:
    environment: str
    database_url: str
    pool_min_size: int
    pool_max_size: int
    pool_max_lifetime: float
    pool_timeout: float
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            environment=env,
            database_url=os.environ.get("MATESTER_DB", ""),
            pool_min_size=int(os.environ.get("MATESTER_POOL_MIN_SIZE", "1")),
            pool_max_size=int(os.environ.get("MATESTER_POOL_MAX_SIZE", "10")),
            pool_max_lifetime=float(os.environ.get("MATESTER_POOL_MAX_LIFETIME", "180")),
            pool_timeout=float(os.environ.get("MATESTER_POOL_TIMEOUT", "30")),
            log_level=os.environ.get("MATESTER_LOG_LEVEL", "INFO").upper(),
        )

    @property
    def database_name(self) -> str:
        """Database name from the connection URL, e.g. "matester_test"."""
        return self.database_url.rsplit("/", 1)[-1].split("?")[0]

    def is_test_database(self) -> bool:
        """True when the configured database is a disposable test database."""
        return self.database_name.endswith("_test")


config = Config.from_env()
