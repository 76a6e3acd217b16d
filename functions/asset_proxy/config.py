import logging
import os
from dataclasses import dataclass
from typing import Optional

TRUTHY = {"1", "true", "yes", "on"}


def parse_log_level(value):
    level = (value or "INFO").strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        return "INFO"
    return level


@dataclass(frozen=True)
class Settings:
    bucket_name: str
    cf_token: Optional[str] = None
    local_mode: bool = False
    origin_url: str = "*"
    admin_key: Optional[str] = None
    asset_prefix: str = "assets/"
    endpoint_url: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ=None):
        """Read settings from the Lambda environment.

        BUCKET_NAME is required; everything else has a default. LOCAL_MODE
        disables the token check and must stay unset in deployed stages.
        """
        env = os.environ if environ is None else environ

        return cls(
            bucket_name=env["BUCKET_NAME"],
            cf_token=env.get("AWS_CF_TOKEN") or None,
            local_mode=env.get("LOCAL_MODE", "").strip().lower() in TRUTHY,
            origin_url=env.get("ORIGIN_URL", "*"),
            admin_key=env.get("ADMIN_KEY") or None,
            asset_prefix=env.get("ASSET_PREFIX", "assets/"),
            endpoint_url=env.get("S3_ENDPOINT_URL") or None,
            log_level=parse_log_level(env.get("LOG_LEVEL")),
        )
