import logging

from ..deployers import FUND_ME_DEPLOYER
from ..exceptions import VerificationFailure
from ..networks import resolve_price_feed_address

logger = logging.getLogger(__name__)

TAGS = ("all", "fundme")


def deploy(deployments, get_named_accounts):
    settings = deployments.settings
    deployer = get_named_accounts()["deployer"]

    eth_usd_price_feed = resolve_price_feed_address(settings.chain_id, settings.network, deployments)

    args = [eth_usd_price_feed]
    fund_me = deployments.deploy(
        "FundMe",
        FUND_ME_DEPLOYER,
        args,
        sender=deployer,
        confirmations=settings.block_confirmations,
    )
    deployments.log("-" * 42)

    if not settings.verification_enabled:
        return
    if deployments.verifier is None:
        logger.warning("ETHERSCAN_API_KEY is set but no verifier was configured; skipping verification")
        return

    try:
        deployments.verifier.verify(fund_me.contract, args)
    except VerificationFailure as e:
        logger.warning("Verification failed, deployment of FundMe at %s stands: %s", fund_me.address, e)
