"""Shared configuration utilities."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeVar, Callable, Generic

import yaml
from dotenv import load_dotenv

load_dotenv()

T = TypeVar('T')


@dataclass
class FeedConfig:
    source: str = "devto"
    url: str | None = None
    source_label: str | None = None
    request_timeout: int = 30
    user_agent: str = "tech-news/1.0 (RSS reader)"


@dataclass
class StoreConfig:
    path: str = "data/articles.json"
    max_articles: int = 50


@dataclass
class CacheConfig:
    enabled: bool = True
    ttl_seconds: int = 300


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 3001


@dataclass
class CorsConfig:
    allow_origin: str = "http://localhost:3000"


@dataclass
class ClientConfig:
    api_base_url: str = "http://localhost:3001"
    request_timeout: int = 30


@dataclass
class AppConfig:
    feed: FeedConfig = field(default_factory=FeedConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    cors: CorsConfig = field(default_factory=CorsConfig)
    client: ClientConfig = field(default_factory=ClientConfig)


def find_config_path(
    config_name: str | None,
    config_dir: Path,
    default_name: str = "prod",
    env_var: str | None = None,
) -> Path:
    """Find config file path, checking env var and defaults.

    Args:
        config_name: Name of config (without .yaml) or None for default
        config_dir: Directory containing config files
        default_name: Default config name if config_name is None
        env_var: Environment variable to check for config name

    Returns:
        Path to the config file

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    if config_name is None:
        config_name = os.environ.get(env_var, default_name) if env_var else default_name

    config_path = config_dir / f"{config_name}.yaml"
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    return config_path


def load_yaml(path: Path) -> dict:
    """Load YAML file and return dict."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def default_config_dir() -> Path:
    """Directory holding the YAML configs (TECH_NEWS_CONFIG_DIR or ./configs)."""
    return Path(os.environ.get("TECH_NEWS_CONFIG_DIR", Path.cwd() / "configs"))


def load_config(config_name: str | None = None, config_dir: Path | None = None) -> AppConfig:
    """Load application configuration from YAML, then apply env overrides.

    Args:
        config_name: Name of config file (without .yaml extension).
                    If None, uses TECH_NEWS_CONFIG env var or "prod".
        config_dir: Directory to look in (default: see default_config_dir)

    Returns:
        Loaded AppConfig object
    """
    config_path = find_config_path(
        config_name,
        config_dir or default_config_dir(),
        env_var="TECH_NEWS_CONFIG",
    )
    return parse_config(load_yaml(config_path))


def parse_config(data: dict) -> AppConfig:
    """Parse config dictionary into AppConfig, applying environment overrides."""
    feed_raw = data.get("feed", {})
    store_raw = data.get("store", {})
    cache_raw = data.get("cache", {})
    server_raw = data.get("server", {})
    cors_raw = data.get("cors", {})
    client_raw = data.get("client", {})

    feed = FeedConfig(
        source=feed_raw.get("source", "devto"),
        url=os.getenv("FEED_URL", feed_raw.get("url")),
        source_label=feed_raw.get("source_label"),
        request_timeout=feed_raw.get("request_timeout", 30),
        user_agent=feed_raw.get("user_agent", "tech-news/1.0 (RSS reader)"),
    )

    store = StoreConfig(
        path=os.getenv("ARTICLES_FILE", store_raw.get("path", "data/articles.json")),
        max_articles=store_raw.get("max_articles", 50),
    )

    cache = CacheConfig(
        enabled=cache_raw.get("enabled", True),
        ttl_seconds=cache_raw.get("ttl_seconds", 300),
    )

    server = ServerConfig(
        host=server_raw.get("host", "0.0.0.0"),
        port=server_raw.get("port", 3001),
    )

    cors = CorsConfig(
        allow_origin=os.getenv("CORS_ORIGIN", cors_raw.get("allow_origin", "http://localhost:3000")),
    )

    client = ClientConfig(
        api_base_url=os.getenv("API_BASE_URL", client_raw.get("api_base_url", "http://localhost:3001")),
        request_timeout=client_raw.get("request_timeout", 30),
    )

    return AppConfig(
        feed=feed,
        store=store,
        cache=cache,
        server=server,
        cors=cors,
        client=client,
    )


class ConfigSingleton(Generic[T]):
    """Generic config singleton manager.

    Provides get/set/reset pattern for managing a global config instance.

    Example:
        >>> _manager = ConfigSingleton(load_config)
        >>> get_config = _manager.get
        >>> set_config = _manager.set
        >>> reset_config = _manager.reset
    """

    def __init__(self, loader: Callable[[], T] | None = None):
        self._config: T | None = None
        self._loader = loader

    def get(self) -> T:
        """Get the config, loading it lazily if needed."""
        if self._config is None:
            if self._loader is None:
                raise RuntimeError("No config loaded and no loader set")
            self._config = self._loader()
        return self._config

    def set(self, config: T) -> None:
        """Set the config directly."""
        self._config = config

    def reset(self) -> None:
        """Reset the config, forcing reload on next get()."""
        self._config = None


_manager: ConfigSingleton[AppConfig] = ConfigSingleton(load_config)
get_config = _manager.get
set_config = _manager.set
reset_config = _manager.reset
