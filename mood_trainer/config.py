# mood_trainer/config.py
import os
import logging

from dotenv import load_dotenv
from pydantic import BaseModel

ENV_PREFIX = "MOOD_"
LOG_FORMAT = "[%(levelname)s] %(asctime)s - %(name)s - %(message)s"


class Settings(BaseModel):
    csv_path: str = "movies_training.csv"
    index_path: str = "index.html"
    static_dir: str = "."
    host: str = "0.0.0.0"
    port: int = 3000

    # network and training defaults
    train_iterations: int = 2000
    error_threshold: float = 0.005
    learning_rate: float = 0.3
    momentum: float = 0.1
    hidden_size: int = 3
    warm_start: bool = True

    log_level: str = "INFO"


def get_settings() -> Settings:
    """Read settings from MOOD_* environment variables (and a local .env file)."""
    load_dotenv()
    values = {}
    for name in Settings.model_fields:
        raw = os.getenv(ENV_PREFIX + name.upper())
        if raw is not None:
            values[name] = raw
    return Settings(**values)


def configure_logging(level="INFO"):
    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
