"""
Deploy tasks, run in order. Each task module exposes
deploy(deployments, get_named_accounts) and a TAGS tuple.
"""

from typing import Callable, Dict, Iterable

from . import deploy_fund_me, deploy_mocks

TASKS = (deploy_mocks, deploy_fund_me)


def run_tasks(deployments, get_named_accounts: Callable[[], Dict[str, str]], tags: Iterable[str] = ("all",)):
    tags = set(tags)
    for task in TASKS:
        if tags.intersection(task.TAGS):
            task.deploy(deployments, get_named_accounts)
    return deployments


def fixture(deployments, get_named_accounts: Callable[[], Dict[str, str]], tags: Iterable[str] = ("all",)):
    """Start from an empty store and run the tasks selected by tags."""
    deployments.reset()
    return run_tasks(deployments, get_named_accounts, tags)
