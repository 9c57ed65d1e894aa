import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from zosale.adapters.clock import SystemClock
from zosale.adapters.memory import InMemoryServiceRepo
from zosale.adapters.seed import seed_records
from zosale.adapters.sqlite.repos import SQLiteServiceRepo
from zosale.components.services import ServiceRecordService, ServiceRepoPort
from zosale.rules.loader import load_rules
from zosale.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.data_dir = Path(os.environ.get("ZOSALE_DATA_DIR", "./data"))
        self.db_path = str(self.data_dir / "zosale.db")
        self.rules_path = Path(os.environ.get("ZOSALE_RULES_PATH", str(self.base_dir / "rules.yaml")))
        self.store = os.environ.get("ZOSALE_STORE", "sqlite").lower()


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules() -> Rules:
    settings = get_settings()
    if not settings.rules_path.exists():
        return Rules()
    return load_rules(settings.rules_path)


# --- Repos ---
@lru_cache
def _memory_repo() -> InMemoryServiceRepo:
    # One store per process when running without a database
    return InMemoryServiceRepo(seed_records())


def get_service_repo(settings: Settings = Depends(get_settings)) -> ServiceRepoPort:
    if settings.store == "memory":
        return _memory_repo()
    return SQLiteServiceRepo(settings.db_path)


# --- Component Services ---
def get_record_service(
    repo: ServiceRepoPort = Depends(get_service_repo),
    rules: Rules = Depends(get_rules),
) -> ServiceRecordService:
    """Get service record component service."""
    return ServiceRecordService(
        repo=repo,
        clock=SystemClock(),
        id_prefix=rules.services.id_prefix,
        max_field_length=rules.services.max_field_length,
        dayfirst=rules.dates.dayfirst,
    )
