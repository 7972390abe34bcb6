import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path

import boa
import click
from dotenv import load_dotenv

from .deploy import run_tasks
from .deployers import FUND_ME_DEPLOYER
from .deployments import Deployments
from .exceptions import ConfigurationError, TransactionFailure
from .networks import connect
from .settings import load_settings
from .verify import VerificationClient

BASE_DIR = Path(__file__).resolve().parent.parent


def network_option():
    return click.option(
        "--network",
        default=None,
        help="Target network (defaults to $FUND_ME_NETWORK, then pyevm)",
    )


def to_wei(ctx, param, value):
    try:
        wei = Decimal(value) * 10**18
    except InvalidOperation:
        raise click.BadParameter(f"'{value}' is not a number") from None
    if wei <= 0 or wei != wei.to_integral_value():
        raise click.BadParameter(f"'{value}' is not a positive ETH amount")
    return int(wei)


def _settings(network):
    try:
        return load_settings(network)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e


def _connect(settings):
    try:
        return connect(settings)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def cli(verbose):
    """
    Scripts for deploying and using the FundMe contract
    """
    load_dotenv(Path(BASE_DIR, ".env"))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@network_option()
@click.option("--tags", "-t", multiple=True, default=("all",), show_default=True,
              help="Deploy tasks to run (all, mocks, fundme)")
@click.option("--export-dir", type=click.Path(file_okay=False, path_type=Path),
              help="Write hardhat-deploy style deployment files here")
def deploy(network, tags, export_dir):
    """Deploy the mock price feed (development only) and FundMe."""
    settings = _settings(network)

    verifier = None
    if settings.verification_enabled:
        # Malformed keys must fail before the first transaction
        try:
            verifier = VerificationClient.from_settings(settings)
        except ConfigurationError as e:
            raise click.ClickException(str(e)) from e

    deployer = _connect(settings)
    deployments = Deployments(settings, verifier=verifier)

    try:
        run_tasks(deployments, lambda: {"deployer": deployer}, tags)
    except (ConfigurationError, TransactionFailure) as e:
        raise click.ClickException(str(e)) from e

    click.echo('Deployed contracts:')
    click.echo('==========================')
    for record in deployments.records():
        click.echo(f'{record.name}: {record.address}')
    click.echo('==========================')

    if export_dir is not None:
        path = deployments.save(export_dir)
        click.echo(f'Deployment files written to {path}')


@cli.command()
@click.argument("address")
@click.option("--amount", default="0.1", show_default=True, callback=to_wei, help="ETH to send")
@network_option()
def fund(address, amount, network):
    """Fund a deployed FundMe contract."""
    settings = _settings(network)
    sender = _connect(settings)
    fund_me = FUND_ME_DEPLOYER.at(address)

    click.echo(f'Funding {address} from {sender}...')
    try:
        fund_me.fund(value=amount)
    except boa.BoaError as e:
        raise click.ClickException(f"Funding reverted: {e}") from e
    click.echo(f'Funded: {fund_me.addressToAmountFunded(sender)} wei recorded for {sender}')


@cli.command()
@click.argument("address")
@network_option()
def withdraw(address, network):
    """Withdraw the whole FundMe balance to its owner."""
    settings = _settings(network)
    sender = _connect(settings)
    fund_me = FUND_ME_DEPLOYER.at(address)

    balance = boa.env.get_balance(fund_me.address)
    click.echo(f'Withdrawing {balance} wei from {address}...')
    try:
        fund_me.withdraw()
    except boa.BoaError as e:
        raise click.ClickException(f"Withdrawal reverted: {e}") from e
    click.echo(f'Withdrawn to {sender}')
