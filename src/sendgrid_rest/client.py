"""SendGrid REST client."""

import json
import logging
from typing import Any, Callable, Dict, List, Optional, TypeVar

from .config import DEFAULT_REST_API_HOST, SendGridConfig, Settings
from .endpoints import SendGridEndpoint
from .exceptions import (
    BadRequestError,
    ConfigurationError,
    DecodeError,
    InternalServerError,
    ServiceUnavailableError,
    TransportError,
    UnauthorizedError,
    UnexpectedStatusError,
)
from .models import (
    Content,
    CreateTemplateRequest,
    CreateTemplateResponse,
    EmailAddress,
    EmailEnvelope,
    ErrorResponse,
    Personalization,
    SendEmailResponse,
    Template,
    TemplateVersion,
    TemplateVersionRequest,
)
from .transport import BaseTransport, HttpxTransport, TransportResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")

SUCCESS_STATUSES = (200, 201, 202)


def _decode(response: TransportResponse, decoder: Optional[Callable[[Any], T]]) -> Optional[T]:
    """Decode a success body; a blank body means no content."""
    if not response.content.strip():
        return None
    try:
        data = json.loads(response.content)
        return decoder(data) if decoder else data
    except (ValueError, KeyError, TypeError) as e:
        raise DecodeError(
            f"Failed to decode response with status {response.status}: {e}",
            raw_body=response.content,
            cause=e,
        ) from e


def _decode_error(content: bytes) -> Optional[ErrorResponse]:
    try:
        return ErrorResponse.from_dict(json.loads(content))
    except (ValueError, KeyError, TypeError):
        return None


def classify_response(
    response: TransportResponse,
    decoder: Optional[Callable[[Any], T]] = None,
    request_context: Optional[str] = None,
) -> Optional[T]:
    """Turn a raw HTTP response into a decoded value or raise the matching error.

    Args:
        response: Response returned by the transport
        decoder: Builds the expected success type from decoded JSON
        request_context: Description of the request, attached to 400 errors

    Returns:
        The decoded success value, or None when the body is empty

    Raises:
        DecodeError: If a success body does not match the expected shape
        BadRequestError: On 400 with a structured description
        TransportError: On 400 whose body is not a structured error
        UnauthorizedError: On 401
        InternalServerError: On 500
        ServiceUnavailableError: On 503
        UnexpectedStatusError: On any other non-2xx status
    """
    status = response.status

    if status in SUCCESS_STATUSES:
        return _decode(response, decoder)

    if status == 400:
        error = _decode_error(response.content)
        if error is None:
            raise TransportError(
                f"Received bad request status. Request: {request_context}. "
                f"Response: {response.content!r}",
                raw_body=response.content,
            )
        logger.warning(f"Bad request ({request_context}): {error.description}")
        raise BadRequestError(error.description, request_context)

    if status == 401:
        logger.warning("SendGrid rejected the API key")
        raise UnauthorizedError()
    if status == 500:
        raise InternalServerError()
    if status == 503:
        raise ServiceUnavailableError()

    if 200 <= status < 300:
        return _decode(response, decoder)

    # Failures are never decoded as success values.
    error = _decode_error(response.content)
    logger.warning(f"Unexpected status {status} ({request_context})")
    raise UnexpectedStatusError(
        status,
        raw_body=response.content,
        description=error.description if error else None,
    )


class SendGridRestClient:
    """Async client for the SendGrid v3 REST API.

    The client holds only its credentials, base host and transport, so one
    instance can serve any number of concurrent calls.
    """

    def __init__(
        self,
        app_token: str,
        rest_api_host: Optional[str] = None,
        transport: Optional[BaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            app_token: SendGrid API key sent as a bearer token
            rest_api_host: API base URL (defaults to the production API)
            transport: HTTP transport (defaults to HttpxTransport)
        """
        self._app_token = app_token
        self._host = rest_api_host or DEFAULT_REST_API_HOST
        self._transport = transport or HttpxTransport()

    @classmethod
    def new_with_config(
        cls,
        app_token: str,
        config: SendGridConfig,
        transport: Optional[BaseTransport] = None,
    ) -> "SendGridRestClient":
        return cls(app_token, config.rest_api_host, transport=transport)

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: Optional[BaseTransport] = None
    ) -> "SendGridRestClient":
        """Build a client from loaded settings.

        Raises:
            ConfigurationError: If no API key is configured
        """
        api_key = settings.sendgrid.api_key
        if not api_key:
            raise ConfigurationError(
                "SendGrid API key not provided. Set SENDGRID_API_KEY or add "
                "sendgrid.api_key to the config file"
            )
        return cls.new_with_config(api_key, settings.sendgrid, transport=transport)

    @property
    def host(self) -> str:
        return self._host

    async def __aenter__(self) -> "SendGridRestClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._transport.aclose()

    def build_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._app_token}",
        }

    def build_url(
        self,
        endpoint: SendGridEndpoint,
        url_params: Optional[str] = None,
        query_params: Optional[str] = None,
    ) -> str:
        return f"{self._host.rstrip('/')}{endpoint.path}{url_params or ''}{query_params or ''}"

    async def send_email_by_template(
        self,
        email_from: str,
        email_from_name: Optional[str],
        email_to: List[EmailAddress],
        email_cc: Optional[List[EmailAddress]] = None,
        email_bcc: Optional[List[EmailAddress]] = None,
        subject: str = "",
        *,
        template_id: str,
        placeholders: Optional[Dict[str, Any]] = None,
    ) -> SendEmailResponse:
        """Send a dynamic-template email to one recipient group.

        Args:
            email_from: Sender address
            email_from_name: Sender display name
            email_to: Recipients, at least one
            email_cc: Carbon-copy recipients
            email_bcc: Blind-carbon-copy recipients
            subject: Subject line; the template may supply its own
            template_id: Dynamic template ID
            placeholders: Values for the template's placeholders

        Returns:
            SendEmailResponse, empty unless the provider reported a message ID
        """
        envelope = EmailEnvelope(
            from_=EmailAddress(email=email_from, name=email_from_name),
            personalizations=[
                Personalization(
                    to=email_to,
                    cc=email_cc,
                    bcc=email_bcc,
                    dynamic_template_data=placeholders,
                )
            ],
            subject=subject,
            template_id=template_id,
        )
        return await self._send(envelope)

    async def send_email(
        self,
        email_from: str,
        email_to: List[EmailAddress],
        subject: str,
        html_content: Optional[str] = None,
        plain_content: Optional[str] = None,
        email_from_name: Optional[str] = None,
        email_cc: Optional[List[EmailAddress]] = None,
        email_bcc: Optional[List[EmailAddress]] = None,
    ) -> SendEmailResponse:
        """Send an email with inline content instead of a template.

        Raises:
            ValueError: If neither html_content nor plain_content is given
        """
        content = []
        # Plain text must precede HTML on the wire.
        if plain_content:
            content.append(Content(type="text/plain", value=plain_content))
        if html_content:
            content.append(Content(type="text/html", value=html_content))
        if not content:
            raise ValueError("Either html_content or plain_content must be provided")

        envelope = EmailEnvelope(
            from_=EmailAddress(email=email_from, name=email_from_name),
            personalizations=[Personalization(to=email_to, cc=email_cc, bcc=email_bcc)],
            subject=subject,
            content=content,
        )
        return await self._send(envelope)

    async def _send(self, envelope: EmailEnvelope) -> SendEmailResponse:
        response = await self._request(
            "POST",
            self.build_url(SendGridEndpoint.MAIL_SEND),
            envelope.to_dict(),
        )
        if response.status == 202:
            # Accepted sends carry no content to decode, whatever the body holds.
            result = SendEmailResponse()
        else:
            result = classify_response(
                response, SendEmailResponse.from_dict, request_context="POST /mail/send"
            )
        if result is None:
            result = SendEmailResponse()
        if result.message_id is None:
            result.message_id = response.header("X-Message-Id")
        logger.info(
            f"Email accepted for {len(envelope.personalizations[0].to)} recipient(s) "
            f"(message_id: {result.message_id})"
        )
        return result

    async def create_template(self, name: str) -> CreateTemplateResponse:
        """Create a dynamic transactional template.

        Returns:
            CreateTemplateResponse with the provider-assigned template ID
        """
        template = await self.post_json(
            SendGridEndpoint.TEMPLATES,
            CreateTemplateRequest(name=name).to_dict(),
            decoder=Template.from_dict,
        )
        if template is None:
            return CreateTemplateResponse()
        logger.info(f"Created template {name!r} ({template.id})")
        return CreateTemplateResponse(template_id=template.id)

    async def get_template(self, template_id: str) -> Optional[Template]:
        """Fetch a template with its versions; None if the provider sent no content."""
        return await self.get_json(
            SendGridEndpoint.TEMPLATES,
            decoder=Template.from_dict,
            url_params=f"/{template_id}",
        )

    async def update_template(
        self,
        name: str,
        template_id: str,
        html_content: str,
        plain_content: str,
        subject: str,
    ) -> Optional[TemplateVersion]:
        """Add a new active version to a template.

        The API has no in-place edit, so every call creates a version. Earlier
        versions stay on the template until removed by the caller.
        """
        request = TemplateVersionRequest(
            template_id=template_id,
            name=name,
            subject=subject,
            active=1,
            html_content=html_content,
            plain_content=plain_content,
            generate_plain_content=True,
            editor="code",
            test_data=None,
        )
        version = await self.post_json(
            SendGridEndpoint.TEMPLATES,
            request.to_dict(),
            decoder=TemplateVersion.from_dict,
            url_params=f"/{template_id}/versions",
        )
        if version is not None:
            logger.info(f"Created version {version.id} of template {template_id}")
        return version

    async def post_json(
        self,
        endpoint: SendGridEndpoint,
        data: Optional[Dict[str, Any]] = None,
        decoder: Optional[Callable[[Any], T]] = None,
        query_params: Optional[str] = None,
        url_params: Optional[str] = None,
    ) -> Optional[T]:
        """POST a JSON body and classify the response."""
        url = self.build_url(endpoint, url_params, query_params)
        response = await self._request("POST", url, data)
        return classify_response(response, decoder, request_context=f"POST {url}")

    async def get_json(
        self,
        endpoint: SendGridEndpoint,
        decoder: Optional[Callable[[Any], T]] = None,
        query_params: Optional[str] = None,
        url_params: Optional[str] = None,
    ) -> Optional[T]:
        """GET a resource and classify the response."""
        url = self.build_url(endpoint, url_params, query_params)
        response = await self._request("GET", url)
        return classify_response(response, decoder, request_context=f"GET {url}")

    async def _request(
        self, method: str, url: str, data: Optional[Dict[str, Any]] = None
    ) -> TransportResponse:
        body = json.dumps(data).encode("utf-8") if data is not None else None
        logger.debug(f"{method} {url} body={data}")
        response = await self._transport.send(method, url, self.build_headers(), body)
        logger.debug(f"{method} {url} -> {response.status}")
        return response
