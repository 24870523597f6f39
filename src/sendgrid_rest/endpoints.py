"""SendGrid API endpoints."""

from enum import Enum


class SendGridEndpoint(str, Enum):
    """Logical API operations and their URL path suffixes."""

    MAIL_SEND = "/mail/send"
    TEMPLATES = "/templates"

    @property
    def path(self) -> str:
        return self.value
