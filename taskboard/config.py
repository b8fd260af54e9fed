from __future__ import annotations

import os
from dataclasses import dataclass

STORAGE_BACKENDS = ("memory", "file", "sqlite")


@dataclass(frozen=True)
class Settings:
    storage: str = "sqlite"
    database_url: str = "sqlite:///./taskboard.db"
    data_dir: str = "./data"
    storage_key: str = "kanban-board-state"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        storage = os.getenv("TASKBOARD_STORAGE", cls.storage).strip().lower()
        if storage not in STORAGE_BACKENDS:
            raise ValueError(
                f"TASKBOARD_STORAGE must be one of {', '.join(STORAGE_BACKENDS)}, got {storage!r}"
            )
        return cls(
            storage=storage,
            database_url=os.getenv(
                "TASKBOARD_DATABASE_URL", os.getenv("DATABASE_URL", cls.database_url)
            ),
            data_dir=os.getenv("TASKBOARD_DATA_DIR", cls.data_dir),
            storage_key=os.getenv("TASKBOARD_STORAGE_KEY", cls.storage_key),
            log_level=os.getenv("TASKBOARD_LOG_LEVEL", cls.log_level).upper(),
            host=os.getenv("HOST", cls.host),
            port=int(os.getenv("PORT", str(cls.port))),
        )
