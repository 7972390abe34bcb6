import os
from datetime import timedelta

import boa
import pytest
from hypothesis import settings, Phase

from fund_me import Deployments, load_settings
from fund_me.deploy import fixture


boa.env.enable_fast_mode()


INITIAL_BALANCE = 1000 * 10**18


settings.register_profile("no-shrink", settings(phases=list(Phase)[:4]), deadline=timedelta(seconds=1000))
settings.register_profile("default", deadline=timedelta(seconds=1000))
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "default"))


# ============== Settings Fixtures ==============

@pytest.fixture(scope="session")
def dev_settings():
    return load_settings("pyevm", environ={})


@pytest.fixture(scope="session")
def sepolia_settings():
    return load_settings("sepolia", environ={"SEPOLIA_RPC_URL": "http://sepolia.invalid"})


# ============== Account Fixtures ==============

@pytest.fixture(scope="session")
def accounts():
    addresses = [boa.env.generate_address() for _ in range(10)]
    for address in addresses:
        boa.env.set_balance(address, INITIAL_BALANCE)
    return addresses


@pytest.fixture(scope="session")
def deployer(accounts):
    return accounts[0]


@pytest.fixture(scope="session")
def get_named_accounts(deployer):
    return lambda: {"deployer": deployer}


# ============== Deployment Fixtures ==============

@pytest.fixture
def deployments(dev_settings, get_named_accounts):
    """Fresh mock + FundMe for every test, rolled back afterwards."""
    with boa.env.anchor():
        yield fixture(Deployments(dev_settings), get_named_accounts, ["all"])


@pytest.fixture
def fund_me(deployments):
    return deployments.get("FundMe").contract


@pytest.fixture
def mock_v3_aggregator(deployments):
    return deployments.get("MockV3Aggregator").contract


@pytest.fixture(scope="module")
def module_deployments(dev_settings, get_named_accounts):
    """Shared deployment for property tests; tests anchor their own changes."""
    with boa.env.anchor():
        yield fixture(Deployments(dev_settings), get_named_accounts, ["all"])


@pytest.fixture(scope="module")
def module_fund_me(module_deployments):
    return module_deployments.get("FundMe").contract
