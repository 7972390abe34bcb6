import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

from fund_me.deployers import FUND_ME_DEPLOYER
from fund_me.networks import connect, is_development_network
from fund_me.settings import load_settings

BASE_DIR = Path(__file__).resolve().parent.parent.parent
load_dotenv(Path(BASE_DIR, ".env"))


def pytest_collection_modifyitems(config, items):
    network = os.getenv("FUND_ME_NETWORK", "pyevm")
    if not is_development_network(network) and os.getenv("FUND_ME_ADDRESS"):
        return
    skip = pytest.mark.skip(reason="staging tests need FUND_ME_NETWORK set to a live network and FUND_ME_ADDRESS")
    for item in items:
        if "staging" in item.nodeid:
            item.add_marker(skip)


@pytest.fixture(scope="module")
def staging_account():
    return connect(load_settings())


@pytest.fixture(scope="module")
def staging_fund_me(staging_account):
    return FUND_ME_DEPLOYER.at(os.environ["FUND_ME_ADDRESS"])
