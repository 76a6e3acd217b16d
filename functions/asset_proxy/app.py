import logging

from asset_proxy.config import Settings
from asset_proxy.router import Router
from asset_proxy.storage import S3AssetStore, create_s3_client

logger = logging.getLogger()


def build_router(settings, client=None):
    if client is None:
        client = create_s3_client(settings)

    store = S3AssetStore(client, settings.bucket_name, prefix=settings.asset_prefix)
    return Router(store, settings)


# Cold start
settings = Settings.from_env()
logger.setLevel(settings.log_level)
if settings.local_mode:
    logger.warning("LOCAL_MODE is on, X-CF-Token is not checked")

router = build_router(settings)


def lambda_handler(event, context):
    return router(event)
