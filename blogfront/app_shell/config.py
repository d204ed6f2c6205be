import logging
import os
from collections.abc import Mapping

from blogfront.adapters.hygraph import HygraphContentSource
from blogfront.adapters.memory_source import InMemoryContentSource
from blogfront.ports.content_source import ContentSourcePort
from blogfront.rules.models import Rules

logger = logging.getLogger(__name__)


class StartupConfigError(RuntimeError):
    """Configuration is not usable; the process should not start."""


def validate_startup(rules: Rules, environ: Mapping[str, str] | None = None) -> None:
    """
    Validate operational requirements before startup.

    Raises:
        StartupConfigError: If the configured content source cannot be reached
            because its endpoint variable is unset.
    """
    env = os.environ if environ is None else environ
    source = rules.content_source

    if source.kind == "hygraph" and not env.get(source.endpoint_env):
        raise StartupConfigError(
            f"Missing required environment variable: {source.endpoint_env}"
        )

    if source.kind == "hygraph" and not env.get(source.token_env):
        # Public content APIs allow anonymous reads; publishing will fail
        logger.warning("%s is not set; requests will be sent without a token", source.token_env)

    logger.info("Configuration validated (content source: %s)", source.kind)


def create_content_source(
    rules: Rules, environ: Mapping[str, str] | None = None
) -> ContentSourcePort:
    """Build the content source adapter named in the rules."""
    env = os.environ if environ is None else environ
    source = rules.content_source

    if source.kind == "memory":
        return InMemoryContentSource()

    return HygraphContentSource(
        env.get(source.endpoint_env, ""),
        env.get(source.token_env) or None,
        timeout=source.timeout_seconds,
    )
