"""Exception classes raised while deploying and verifying FundMe."""


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""

    pass


class ConfigurationError(DeploymentError, ValueError):
    """Raised for unusable configuration; always fatal and raised before any transaction."""

    pass


class MissingNetworkConfigError(ConfigurationError):
    """Raised when a persistent network has no price feed configured."""

    pass


class MissingMockError(ConfigurationError):
    """Raised when a development network has no mock price feed deployed yet."""

    pass


class DeploymentNotFoundError(DeploymentError, KeyError):
    """Raised when a named deployment is not in the store."""

    def __str__(self):
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""


class TransactionFailure(DeploymentError, RuntimeError):
    """Raised when a deployment transaction fails or reverts."""

    pass


class VerificationFailure(DeploymentError):
    """Raised when the block explorer rejects a verification request."""

    pass
