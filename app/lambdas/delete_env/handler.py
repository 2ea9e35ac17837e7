# app/lambdas/delete_env/handler.py
import json

from env_registry import codec
from env_registry.config import build_store, configure_logging, load_settings
from env_registry.service import EnvironmentRegistry

settings = load_settings()
logger = configure_logging(settings)

registry = EnvironmentRegistry(build_store(settings))


def lambda_handler(event, context):
    """DELETE /environments/{envName}. Deleting an absent name still succeeds."""
    logger.info("Received event: %s", json.dumps(event))
    return registry.delete_environment(codec.env_name_from_path(event))
