"""Post-generation provisioning service modules."""

from .provision_project import (
    INSTALL_PATH_STEPS,
    STEP_COPY_ASSETS,
    STEP_FORMAT_NO_INSTALL,
    STEP_GIT_INIT,
    STEP_RESOLVE_MANAGER,
    STEP_WAIT,
    ProvisionProjectDependencies,
    ProvisionProjectOutcome,
    ProvisionProjectRequest,
    ProvisionProjectService,
)

__all__ = [
    "INSTALL_PATH_STEPS",
    "STEP_COPY_ASSETS",
    "STEP_FORMAT_NO_INSTALL",
    "STEP_GIT_INIT",
    "STEP_RESOLVE_MANAGER",
    "STEP_WAIT",
    "ProvisionProjectDependencies",
    "ProvisionProjectOutcome",
    "ProvisionProjectRequest",
    "ProvisionProjectService",
]
