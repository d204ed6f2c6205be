import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from blogfront.app_shell.config import create_content_source
from blogfront.components.page_meta import PageMetaService, create_page_meta_service
from blogfront.ports.content_source import ContentSourcePort
from blogfront.rules.loader import load_rules
from blogfront.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.rules_path = Path(
            os.environ.get("BLOGFRONT_RULES_PATH", str(self.base_dir / "rules.yaml"))
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules() -> Rules:
    return load_rules(get_settings().rules_path)


# --- Content Source ---
# One adapter per process: the HTTP client pool and the in-memory store are shared
@lru_cache
def get_content_source() -> ContentSourcePort:
    return create_content_source(get_rules())


# --- Services ---
def get_page_meta_service(rules: Rules = Depends(get_rules)) -> PageMetaService:
    return create_page_meta_service(rules.site)
