"""
Deployment Errors
"""


class DeploymentFailure(Exception):
    """Base class for every error raised while resolving or deploying a contract"""


class NetworkConfigError(DeploymentFailure):
    """Network is unknown, misconfigured or unreachable"""


class ArtifactError(DeploymentFailure):
    """Artifact exists but cannot be used"""


class ArtifactNotFoundError(ArtifactError):
    """No single artifact matches the requested contract name"""


class DeploymentError(DeploymentFailure):
    """Deployment transaction could not be sent or was reverted"""
