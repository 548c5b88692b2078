"""
broping core settings provider
"""

import os
import sys
import json
import functools
from typing import Any, Callable, Dict, List, Optional, Tuple, Type

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from .schemas import config


SETTINGS_LOG_ERROR_FUNCTION: Optional[Callable[[str], Any]] = functools.partial(print, file=sys.stderr)
"""
optional function to accept log messages on failure
"""

SETTINGS_LOG_INFO_FUNCTION: Optional[Callable[[str], Any]] = None
"""
optional function to accept log messages when creating a new configuration file
"""

CONFIG_PATHS: List[str] = ["config.json", os.path.join("..", "config.json")]
"""
list of search paths for the config file, can be overwritten by the env variable ``CONFIG_PATH``
"""

if os.environ.get("CONFIG_PATH"):
    CONFIG_PATHS = [os.environ.get("CONFIG_PATH")]


def get_db_from_env(db_override: Optional[str] = None) -> Optional[str]:
    if db_override:
        return db_override
    return os.environ.get("DATABASE_CONNECTION", os.environ.get("DATABASE__CONNECTION", None))


def read_settings_from_file() -> Dict[str, Any]:
    """
    Return the content of the first existing config file (or an empty dict if there's none)
    """

    for path in CONFIG_PATHS:
        if os.path.exists(path):
            with open(path, "r", encoding="UTF-8") as file:
                try:
                    return json.load(file)
                except ValueError:
                    if SETTINGS_LOG_ERROR_FUNCTION:
                        SETTINGS_LOG_ERROR_FUNCTION(f"Config file {path!r} doesn't contain valid JSON.")
                    raise
    return {}


class ConfigFileSettingsSource(PydanticBaseSettingsSource):
    """
    Settings source reading the JSON config file found in one of the ``CONFIG_PATHS``
    """

    def get_field_value(self, field, field_name: str) -> Tuple[Any, str, bool]:
        return None, field_name, False

    def __call__(self) -> Dict[str, Any]:
        return read_settings_from_file()


class Settings(BaseSettings, config.CoreConfig):
    """
    broping core settings

    Do not change the settings at runtime, since this might lead to unspecified
    behavior. Always restart the server after changing the config file. Note
    that the server and database config might get overwritten during startup
    (via command-line arguments) or during unit testing.
    """

    model_config = SettingsConfigDict(env_nested_delimiter="__", env_file=".env", extra="ignore")

    @classmethod
    def settings_customise_sources(
            cls,
            settings_cls: Type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,
            file_secret_settings: PydanticBaseSettingsSource
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
            ConfigFileSettingsSource(settings_cls)
        )


def get_default_core_config(database_override: Optional[str] = None) -> config.CoreConfig:
    c = config.CoreConfig(
        server=config.ServerConfig(),
        database=config.DatabaseConfig(),
        logging=config.LoggingConfig()
    )
    if database_override:
        c.database.connection = database_override
    return c


def store_configuration(conf: Optional[config.CoreConfig] = None, path: Optional[str] = None) -> config.CoreConfig:
    p = path or os.path.abspath(CONFIG_PATHS[0])
    conf = conf or get_default_core_config(get_db_from_env())
    with open(p, "w") as f:
        json.dump(conf.model_dump(), f, indent=4)
    SETTINGS_LOG_INFO_FUNCTION and SETTINGS_LOG_INFO_FUNCTION(f"A new config file has been created as {p!r}.")
    return conf


def get_default_config() -> Dict[str, Any]:
    return get_default_core_config().model_dump()
