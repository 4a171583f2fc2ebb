"""SDK Python de l'API partenaire Legitmark (authentification d'articles)."""

from legitmark.classify import classify_failure, classify_http_error
from legitmark.client import (
    API_KEY_PREFIX,
    IMAGE_CONTENT_TYPES,
    SDK_VERSION,
    Legitmark,
    PartnerClient,
)
from legitmark.config import (
    ClientConfig,
    EnvironmentValidation,
    config_from_env,
    create_client,
    create_client_from_env,
    load_config_file,
    validate_environment,
)
from legitmark.errors import ConfigurationError, ErrorCode, ErrorContext, LegitmarkError
from legitmark.models import (
    CreateSRRequest,
    ItemSelection,
    ProgressData,
    ServiceRequest,
    Side,
    SideGroup,
    SRPrimaryState,
    SRRequirements,
    SRSides,
    SRState,
    SRSupplementState,
    SubmitResult,
)
from legitmark.retry import RetryOptions, with_retry
from legitmark.utils.logging import setup_logging
from legitmark.webhooks import (
    LegitmarkWebhookEvent,
    WebhookValidationError,
    is_authentic,
    is_authentication_in_progress,
    is_cancelled,
    is_counterfeit,
    is_qc_approved,
    needs_resubmission,
    parse_webhook_event,
)
from legitmark.workflow import (
    WORKFLOW_STEP_NAMES,
    WorkflowCallbacks,
    WorkflowOptions,
    WorkflowRunner,
    WorkflowState,
    WorkflowStep,
)

__version__ = SDK_VERSION

__all__ = [
    "API_KEY_PREFIX",
    "IMAGE_CONTENT_TYPES",
    "SDK_VERSION",
    "WORKFLOW_STEP_NAMES",
    "ClientConfig",
    "ConfigurationError",
    "CreateSRRequest",
    "EnvironmentValidation",
    "ErrorCode",
    "ErrorContext",
    "ItemSelection",
    "Legitmark",
    "LegitmarkError",
    "LegitmarkWebhookEvent",
    "PartnerClient",
    "ProgressData",
    "RetryOptions",
    "SRPrimaryState",
    "SRRequirements",
    "SRSides",
    "SRState",
    "SRSupplementState",
    "ServiceRequest",
    "Side",
    "SideGroup",
    "SubmitResult",
    "WebhookValidationError",
    "WorkflowCallbacks",
    "WorkflowOptions",
    "WorkflowRunner",
    "WorkflowState",
    "WorkflowStep",
    "classify_failure",
    "classify_http_error",
    "config_from_env",
    "create_client",
    "create_client_from_env",
    "is_authentic",
    "is_authentication_in_progress",
    "is_cancelled",
    "is_counterfeit",
    "is_qc_approved",
    "load_config_file",
    "needs_resubmission",
    "parse_webhook_event",
    "setup_logging",
    "validate_environment",
    "with_retry",
]
