# env_registry/config.py
import logging
import os
from dataclasses import dataclass
from typing import Optional

import boto3

from env_registry.store import DynamoEnvironmentStore

DEFAULT_TABLE_NAME = "environments"


@dataclass
class Settings:
    table_name: str = DEFAULT_TABLE_NAME
    region: Optional[str] = None
    endpoint_url: Optional[str] = None
    log_level: str = "INFO"


def load_settings(environ=None) -> Settings:
    """Read settings from the process environment (or a given mapping)."""
    env = os.environ if environ is None else environ
    return Settings(
        table_name=env.get("TABLE_NAME", DEFAULT_TABLE_NAME),
        region=env.get("AWS_REGION") or None,
        endpoint_url=env.get("DYNAMODB_ENDPOINT_URL") or None,
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(settings: Settings) -> logging.Logger:
    # Lambda installs its own handler on the root logger; only the level is ours
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, settings.log_level, logging.INFO))
    return logger


def build_store(settings: Settings) -> DynamoEnvironmentStore:
    dynamodb = boto3.resource(
        "dynamodb",
        region_name=settings.region,
        endpoint_url=settings.endpoint_url,
    )
    return DynamoEnvironmentStore(dynamodb.Table(settings.table_name))
