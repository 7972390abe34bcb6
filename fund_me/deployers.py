"""
Compiled deployers for the contracts this package deploys.
Each deployer is a VyperDeployer object returned using boa.load_partial().
"""

import boa

from .constants import CONTRACTS_DIR

# Base compiler args
compiler_args_default = {"experimental_codegen": False}

# Contract paths
BASE_CONTRACT_PATH = CONTRACTS_DIR
TESTING_CONTRACT_PATH = CONTRACTS_DIR / "testing"

FUND_ME_DEPLOYER = boa.load_partial(
    str(BASE_CONTRACT_PATH / "FundMe.vy"), compiler_args=compiler_args_default
)

# Testing/Mock contracts
MOCK_V3_AGGREGATOR_DEPLOYER = boa.load_partial(
    str(TESTING_CONTRACT_PATH / "MockV3Aggregator.vy"),
    compiler_args=compiler_args_default,
)
