from ..constants import DECIMALS, INITIAL_ANSWER
from ..deployers import MOCK_V3_AGGREGATOR_DEPLOYER
from ..networks import MOCK_NAME, is_development_network

TAGS = ("all", "mocks")


def deploy(deployments, get_named_accounts):
    deployer = get_named_accounts()["deployer"]

    if is_development_network(deployments.settings.network):
        deployments.log("Local network detected! Deploying mocks...")
        deployments.deploy(
            MOCK_NAME,
            MOCK_V3_AGGREGATOR_DEPLOYER,
            [DECIMALS, INITIAL_ANSWER],
            sender=deployer,
        )
        deployments.log("Mocks deployed!")
        deployments.log("-" * 42)
