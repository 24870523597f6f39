"""Async client for the SendGrid v3 REST API."""

__version__ = "0.1.0"

from .exceptions import (
    SendGridError,
    ConfigurationError,
    TransportError,
    DecodeError,
    ApiError,
    BadRequestError,
    UnauthorizedError,
    InternalServerError,
    ServiceUnavailableError,
    UnexpectedStatusError,
)
from .endpoints import SendGridEndpoint
from .config import DEFAULT_REST_API_HOST, SendGridConfig, Settings, load_settings
from .models import (
    EmailAddress,
    Personalization,
    Content,
    EmailEnvelope,
    SendEmailResponse,
    Template,
    TemplateVersion,
    TemplateVersionRequest,
    CreateTemplateRequest,
    CreateTemplateResponse,
)
from .transport import BaseTransport, HttpxTransport, TransportResponse
from .client import SendGridRestClient, classify_response

__all__ = [
    "SendGridError",
    "ConfigurationError",
    "TransportError",
    "DecodeError",
    "ApiError",
    "BadRequestError",
    "UnauthorizedError",
    "InternalServerError",
    "ServiceUnavailableError",
    "UnexpectedStatusError",
    "SendGridEndpoint",
    "DEFAULT_REST_API_HOST",
    "SendGridConfig",
    "Settings",
    "load_settings",
    "EmailAddress",
    "Personalization",
    "Content",
    "EmailEnvelope",
    "SendEmailResponse",
    "Template",
    "TemplateVersion",
    "TemplateVersionRequest",
    "CreateTemplateRequest",
    "CreateTemplateResponse",
    "BaseTransport",
    "HttpxTransport",
    "TransportResponse",
    "SendGridRestClient",
    "classify_response",
]
