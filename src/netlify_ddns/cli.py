"""
CLI entry point for Netlify DDNS.

This module runs a single update pass and maps its result to an exit code.
"""

from __future__ import annotations

import asyncio
import functools
import logging
import sys

from netlify_ddns.config import Config, load_config
from netlify_ddns.errors import ConfigValidationError, DDNSError
from netlify_ddns.ipify import discover_ipv4, ipify_client
from netlify_ddns.logging_config import setup_logging
from netlify_ddns.models import ReconcileOutcome
from netlify_ddns.netlify import NetlifyClient
from netlify_ddns.reconciler import Reconciler

logger = logging.getLogger(__name__)


async def run(config: Config) -> ReconcileOutcome:
    """
    Reconcile the configured record once.

    Parameters
    ----------
    config : Config
        Application configuration.

    Returns
    -------
    ReconcileOutcome
        The outcome of the pass.
    """
    async with (
        NetlifyClient(config.access_token) as netlify,
        ipify_client() as ipify_http,
    ):
        reconciler = Reconciler(
            config,
            netlify,
            discover=functools.partial(discover_ipv4, ipify_http),
        )
        return await reconciler.reconcile()


def main() -> None:
    """
    Update the Netlify DNS record and exit.

    Exits with status 1 on configuration, IP discovery or API errors.
    """
    try:
        config = load_config()
    except ConfigValidationError as e:
        print(e, file=sys.stderr)  # noqa: T201
        sys.exit(1)

    setup_logging(config.log_level)

    try:
        outcome = asyncio.run(run(config))
    except DDNSError as e:
        logger.error("error Updating DNS Record %s", e)  # noqa: TRY400
        sys.exit(1)

    logger.debug("Finished: %s.", outcome)


if __name__ == "__main__":
    main()
