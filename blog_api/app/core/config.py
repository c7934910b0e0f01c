"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields, so the
service starts on port 3003 with the seed users and no extra setup.
"""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Blog API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional path of a log file in addition to the console handler.
    log_file: str = os.getenv("LOG_FILE", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3003"))

    # Prefix under which the v1 router is mounted.  Empty by default so
    # that clients reach ``/users`` and ``/posts`` directly.
    api_prefix: str = os.getenv("API_PREFIX", "")

    # How new post ids are chosen: ``length`` assigns the current number
    # of posts plus one (ids may repeat after deletions), ``sequence``
    # uses a counter that never goes backwards.
    post_id_policy: str = os.getenv("POST_ID_POLICY", "length")

    # When enabled, PATCH /posts/{id} type-checks title, content and
    # published before merging.  Otherwise any value shape is merged.
    strict_post_patch: bool = _env_flag("STRICT_POST_PATCH", "false")

    # Load the fixed demo users into the user store at startup.
    seed_users: bool = _env_flag("SEED_USERS", "true")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
