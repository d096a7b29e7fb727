"""
PriceConsumer Deployment
Deploys the PriceConsumer contract and prints its address
"""

import asyncio
import os
import sys
from loguru import logger

from blockchain.contract_factory import get_contract_factory

CONTRACT_NAME = "PriceConsumer"


def configure_logging():
    """Progress on stdout, errors on stderr, optional debug file"""
    logger.remove()
    logger.add(
        sys.stdout,
        format="{message}",
        level="INFO",
        filter=lambda record: record["level"].no < logger.level("ERROR").no
    )
    logger.add(
        sys.stderr,
        format="<red>{message}</red>",
        level="ERROR",
        diagnose=False
    )

    log_file = os.getenv('DEPLOY_LOG_FILE')
    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
            level="DEBUG"
        )


async def deploy_price_consumer(get_factory=None):
    """Resolve the factory, deploy once and report the address"""
    get_factory = get_factory or get_contract_factory

    logger.info("Getting artifacts")
    factory = await get_factory(CONTRACT_NAME)

    logger.info("Deploying")
    price_consumer = await factory.deploy()

    logger.info(f"priceConsumer deployed to:  {price_consumer.address}")
    return price_consumer


def main() -> int:
    """Run the deployment; returns the process exit code"""
    try:
        configure_logging()
        asyncio.run(deploy_price_consumer())
    except Exception as e:
        logger.opt(exception=e).error(f"{type(e).__name__}: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
