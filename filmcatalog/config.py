"""Application configuration loaded from environment variables (prefix FILMCATALOG_)."""

from functools import lru_cache  # settings are read once per process

from pydantic import Field  # field defaults and bounds
from pydantic_settings import BaseSettings, SettingsConfigDict  # env-driven settings


class Settings(BaseSettings):
	data_source: str = Field(default='data/movies.json')  # path or http(s) URL of the catalog
	storage_path: str = Field(default='.filmcatalog/storage.json')  # local key-value store file
	page_size: int = Field(default=36, ge=1)  # movies revealed per "load more"
	directory_page_size: int = Field(default=40, ge=1)  # names per directory page
	debounce_ms: int = Field(default=300, ge=0)  # search input debounce window
	default_poster: str = Field(default='default.png')  # placeholder for movies without a poster
	request_timeout: float = Field(default=10.0, gt=0)  # seconds for the one remote fetch
	log_level: str = Field(default='INFO')

	model_config = SettingsConfigDict(env_prefix='FILMCATALOG_', env_file='.env', env_file_encoding='utf-8')


@lru_cache(maxsize=1)
def get_settings() -> Settings:
	"""Return cached settings instance."""

	return Settings()
