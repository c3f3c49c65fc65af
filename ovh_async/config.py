"""
Credential loading for ovh-async.

Credentials come from an ``ovh.conf`` ini file (the format shared with
the other OVH SDKs) or from a ``.env`` file, and in both cases each key
can be overridden by an ``OVH_*`` environment variable.

Example ``ovh.conf``::

    [default]
    ; general configuration: default endpoint
    endpoint=ovh-eu

    [ovh-eu]
    application_key=my_app_key
    application_secret=my_application_secret
    consumer_key=my_consumer_key

Copyright (c) 2026 Snapp'
Author: Yannis Duvignau (yduvignau@snapp.fr)
"""

import configparser
import logging
import os
from pathlib import Path
from typing import NamedTuple, Optional, Union

from dotenv import dotenv_values

from ovh_async.constants import CONFIG_KEYS, CONFIG_PATHS, ENV_FILE
from ovh_async.exceptions import InvalidConfiguration
from ovh_async.validation import mask_key

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class OvhCredentials(NamedTuple):
    """Credential set required to sign API requests."""

    endpoint: str
    application_key: str
    application_secret: str
    consumer_key: str


def _env_name(key: str) -> str:
    return f"OVH_{key.upper()}"


def _read_ini(path: Optional[PathLike]) -> configparser.ConfigParser:
    parser = configparser.ConfigParser(interpolation=None)
    if path is None:
        read = parser.read(CONFIG_PATHS, encoding="utf-8")
        logger.debug("Read configuration from %s", read or "no file")
        return parser

    path = Path(path)
    if not path.is_file():
        raise InvalidConfiguration(f"configuration file not found: {path}")
    try:
        parser.read(path, encoding="utf-8")
    except (configparser.Error, OSError) as e:
        raise InvalidConfiguration(f"cannot read {path}: {e}") from e
    logger.debug("Read configuration from %s", path)
    return parser


def load_conf(path: Optional[PathLike] = None) -> OvhCredentials:
    """
    Load credentials from an ovh.conf ini file.

    The endpoint is read from the ``[default]`` section, the keys from
    the section named after the endpoint. ``OVH_*`` environment
    variables take precedence over file values.

    Parameters:
        path: Explicit file to read; when None, the standard locations are merged

    Returns:
        The loaded credentials

    Raises:
        InvalidConfiguration: When the file is missing or a key is absent
    """
    parser = _read_ini(path)

    endpoint = os.environ.get(_env_name("endpoint")) or parser.get(
        "default", "endpoint", fallback=None
    )
    if not endpoint:
        raise InvalidConfiguration("missing key `endpoint`")

    values = {"endpoint": endpoint}
    for key in CONFIG_KEYS[1:]:
        value = os.environ.get(_env_name(key)) or parser.get(endpoint, key, fallback=None)
        if not value:
            raise InvalidConfiguration(f"missing key `{key}`")
        values[key] = value

    creds = OvhCredentials(**values)
    logger.debug(
        "Loaded credentials for %s (application key %s)",
        creds.endpoint,
        mask_key(creds.application_key),
    )
    return creds


def load_credentials(env_file: Optional[PathLike] = None) -> Optional[OvhCredentials]:
    """
    Load credentials from a .env file, with per-key environment override.

    Parameters:
        env_file: .env file to read; defaults to ENV_FILE

    Returns:
        The credentials, or None when any key is still missing
    """
    env_file = Path(env_file) if env_file is not None else ENV_FILE

    file_values: dict = {}
    if env_file.is_file():
        file_values = dotenv_values(env_file)
        logger.debug("Read %d value(s) from %s", len(file_values), env_file)

    values = {}
    for key in CONFIG_KEYS:
        name = _env_name(key)
        value = os.environ.get(name) or file_values.get(name)
        if not value:
            logger.debug("Credential %s not found", name)
            return None
        values[key] = value

    return OvhCredentials(**values)


def save_credentials(creds: OvhCredentials, env_file: Optional[PathLike] = None) -> bool:
    """
    Save credentials to a .env file readable only by the current user.

    Parameters:
        creds: Credentials to save
        env_file: Destination file; defaults to ENV_FILE

    Returns:
        True if the file was written
    """
    env_file = Path(env_file) if env_file is not None else ENV_FILE
    content = "".join(
        f"{_env_name(key)}={value}\n" for key, value in creds._asdict().items()
    )
    try:
        env_file.parent.mkdir(parents=True, exist_ok=True)
        env_file.write_text(content, encoding="utf-8")
        env_file.chmod(0o600)
    except OSError as e:
        logger.error("Failed to save credentials to %s: %s", env_file, e)
        return False

    logger.info("Credentials saved to %s", env_file)
    return True
