import logging
from dataclasses import replace

import boa
import pytest

from fund_me import Deployments
from fund_me.constants import NETWORK_CONFIG
from fund_me.deploy import TASKS, deploy_fund_me, deploy_mocks, fixture, run_tasks
from fund_me.exceptions import MissingMockError, VerificationFailure
from fund_me.settings import load_settings
from fund_me.verify import VerificationClient

API_KEY = "A" * 34


class RecordingVerifier:
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def verify(self, contract, constructor_args=()):
        self.calls.append((str(contract.address), list(constructor_args)))
        if self.error is not None:
            raise self.error


@pytest.fixture
def sepolia_with_key(sepolia_settings):
    return replace(sepolia_settings, etherscan_api_key=API_KEY)


@pytest.fixture
def isolate():
    with boa.env.anchor():
        yield


def test_task_order_and_tags():
    assert TASKS == (deploy_mocks, deploy_fund_me)
    assert deploy_mocks.TAGS == ("all", "mocks")
    assert deploy_fund_me.TAGS == ("all", "fundme")


def test_fixture_all(deployments):
    mock = deployments.get("MockV3Aggregator")
    fund_me = deployments.get("FundMe")

    assert fund_me.contract.priceFeed() == mock.address


def test_mocks_only(dev_settings, get_named_accounts, isolate):
    deployments = fixture(Deployments(dev_settings), get_named_accounts, ["mocks"])

    assert deployments.has("MockV3Aggregator")
    assert not deployments.has("FundMe")


def test_fund_me_only_needs_mock(dev_settings, get_named_accounts, isolate):
    with pytest.raises(MissingMockError):
        fixture(Deployments(dev_settings), get_named_accounts, ["fundme"])


def test_fund_me_after_mocks(dev_settings, get_named_accounts, isolate):
    deployments = fixture(Deployments(dev_settings), get_named_accounts, ["mocks"])
    run_tasks(deployments, get_named_accounts, ["fundme"])

    assert deployments.get("FundMe").args == (deployments.get("MockV3Aggregator").address,)


def test_unknown_tag_runs_nothing(dev_settings, get_named_accounts, isolate):
    deployments = fixture(Deployments(dev_settings), get_named_accounts, ["nope"])

    assert deployments.records() == []


def test_fixture_resets_store(deployments, get_named_accounts):
    fixture(deployments, get_named_accounts, ["mocks"])

    assert not deployments.has("FundMe")


def test_mocks_skipped_on_persistent_network(sepolia_settings, get_named_accounts, isolate):
    deployments = run_tasks(Deployments(sepolia_settings), get_named_accounts, ["mocks"])

    assert deployments.records() == []


@pytest.mark.parametrize("network", ["sepolia", "mainnet", "polygon"])
def test_persistent_network_uses_configured_feed(network, get_named_accounts, isolate):
    settings = load_settings(network, environ={})
    deployments = run_tasks(Deployments(settings), get_named_accounts, ["all"])
    fund_me = deployments.get("FundMe")

    assert not deployments.has("MockV3Aggregator")
    assert fund_me.args == (NETWORK_CONFIG[settings.chain_id]["eth_usd_price_feed"],)
    assert fund_me.contract.priceFeed().lower() == NETWORK_CONFIG[settings.chain_id]["eth_usd_price_feed"].lower()
    assert fund_me.details["confirmations"] == 6


def test_no_verification_on_development(dev_settings, get_named_accounts, isolate):
    verifier = RecordingVerifier()
    settings = replace(dev_settings, etherscan_api_key=API_KEY)

    run_tasks(Deployments(settings, verifier=verifier), get_named_accounts, ["all"])

    assert verifier.calls == []


def test_no_verification_without_key(sepolia_settings, get_named_accounts, isolate):
    verifier = RecordingVerifier()

    run_tasks(Deployments(sepolia_settings, verifier=verifier), get_named_accounts, ["all"])

    assert verifier.calls == []


def test_verification_with_constructor_args(sepolia_with_key, get_named_accounts, isolate):
    verifier = RecordingVerifier()

    deployments = run_tasks(Deployments(sepolia_with_key, verifier=verifier), get_named_accounts, ["all"])

    fund_me = deployments.get("FundMe")
    assert verifier.calls == [(fund_me.address, [NETWORK_CONFIG[11155111]["eth_usd_price_feed"]])]


def test_verification_failure_keeps_deployment(sepolia_with_key, get_named_accounts, isolate, caplog):
    verifier = RecordingVerifier(error=VerificationFailure("rate limited"))

    with caplog.at_level(logging.WARNING):
        deployments = run_tasks(Deployments(sepolia_with_key, verifier=verifier), get_named_accounts, ["all"])

    assert deployments.has("FundMe")
    assert len(verifier.calls) == 1
    assert "rate limited" in caplog.text


def test_key_without_verifier_warns(sepolia_with_key, get_named_accounts, isolate, caplog):
    with caplog.at_level(logging.WARNING):
        deployments = run_tasks(Deployments(sepolia_with_key), get_named_accounts, ["all"])

    assert deployments.has("FundMe")
    assert "skipping verification" in caplog.text


def test_mock_deploy_logs(dev_settings, get_named_accounts, isolate, caplog):
    with caplog.at_level(logging.INFO):
        fixture(Deployments(dev_settings), get_named_accounts, ["mocks"])

    assert "Local network detected! Deploying mocks..." in caplog.text
    assert "Mocks deployed!" in caplog.text


def test_verification_timeout_keeps_deployment(sepolia_with_key, get_named_accounts, isolate, monkeypatch, caplog):
    def timing_out(contract, verifier):
        raise TimeoutError("Timeout waiting for verification to complete")

    monkeypatch.setattr(boa, "verify", timing_out)
    verifier = VerificationClient.from_settings(sepolia_with_key)

    with caplog.at_level(logging.WARNING):
        deployments = run_tasks(Deployments(sepolia_with_key, verifier=verifier), get_named_accounts, ["all"])

    assert deployments.has("FundMe")
    assert "Timeout waiting for verification" in caplog.text
