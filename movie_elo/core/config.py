from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


REPO_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_ignore_empty=True,
    )

    web_host: str = Field(default="127.0.0.1", alias="MOVIE_ELO_WEB_HOST")
    web_port: int = Field(default=8791, alias="MOVIE_ELO_WEB_PORT")

    default_k_factor: float = Field(default=32.0, gt=0.0, alias="MOVIE_ELO_K_FACTOR")
    title_column: str = Field(default="title", alias="MOVIE_ELO_TITLE_COLUMN")
    rating_column: str = Field(default="elo", alias="MOVIE_ELO_RATING_COLUMN")

    exports_dir: str = Field(default="exports", alias="MOVIE_ELO_EXPORTS_DIR")
    log_level: str = Field(default="info", alias="MOVIE_ELO_LOG_LEVEL")

    def resolve_path(self, path_value: str) -> Path:
        candidate = Path(path_value).expanduser()
        if candidate.is_absolute():
            return candidate
        return REPO_ROOT / candidate

    @property
    def exports_path(self) -> Path:
        return self.resolve_path(self.exports_dir)

    def ensure_runtime_dirs(self) -> None:
        self.exports_path.mkdir(parents=True, exist_ok=True)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
