"""Wire models for the SendGrid v3 API.

Every model serializes through ``to_dict`` and parses through ``from_dict``.
Optional fields are only written when they hold a value, so the provider
never receives ``null`` for a field the caller left out.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

DYNAMIC_GENERATION = "dynamic"


def _put(data: Dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        data[key] = value


def _addresses(items: Optional[List["EmailAddress"]]) -> Optional[List[Dict[str, Any]]]:
    if items is None:
        return None
    return [item.to_dict() for item in items]


def _parse_addresses(items: Optional[List[Dict[str, Any]]]) -> Optional[List["EmailAddress"]]:
    if items is None:
        return None
    return [EmailAddress.from_dict(item) for item in items]


@dataclass
class EmailAddress:
    """A sender or recipient address with an optional display name."""

    email: str
    name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"email": self.email}
        _put(data, "name", self.name)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EmailAddress":
        return cls(email=data["email"], name=data.get("name"))


@dataclass
class Personalization:
    """One recipient group and the placeholder data rendered for it."""

    to: List[EmailAddress]
    cc: Optional[List[EmailAddress]] = None
    bcc: Optional[List[EmailAddress]] = None
    dynamic_template_data: Optional[Dict[str, Any]] = None

    def __post_init__(self):
        if not self.to:
            raise ValueError("A personalization needs at least one 'to' address")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"to": _addresses(self.to)}
        _put(data, "cc", _addresses(self.cc))
        _put(data, "bcc", _addresses(self.bcc))
        _put(data, "dynamic_template_data", self.dynamic_template_data)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Personalization":
        return cls(
            to=_parse_addresses(data["to"]),
            cc=_parse_addresses(data.get("cc")),
            bcc=_parse_addresses(data.get("bcc")),
            dynamic_template_data=data.get("dynamic_template_data"),
        )


@dataclass
class Content:
    """An inline body part, e.g. ``text/plain`` or ``text/html``."""

    type: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "value": self.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Content":
        return cls(type=data["type"], value=data["value"])


@dataclass
class EmailEnvelope:
    """Body of a ``POST /mail/send`` request."""

    from_: EmailAddress
    personalizations: List[Personalization]
    subject: str = ""
    template_id: Optional[str] = None
    content: Optional[List[Content]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "from": self.from_.to_dict(),
            "personalizations": [p.to_dict() for p in self.personalizations],
            "subject": self.subject,
        }
        _put(data, "template_id", self.template_id)
        if self.content:
            data["content"] = [part.to_dict() for part in self.content]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EmailEnvelope":
        content = data.get("content")
        return cls(
            from_=EmailAddress.from_dict(data["from"]),
            personalizations=[Personalization.from_dict(p) for p in data["personalizations"]],
            subject=data.get("subject", ""),
            template_id=data.get("template_id"),
            content=[Content.from_dict(part) for part in content] if content else None,
        )


@dataclass
class SendEmailResponse:
    """Result of an accepted send. The provider does not echo the message."""

    message_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SendEmailResponse":
        if not isinstance(data, dict):
            raise TypeError(f"Expected a JSON object, got {type(data).__name__}")
        return cls(message_id=data.get("message_id"))


@dataclass
class TemplateVersion:
    """A content revision of a transactional template."""

    id: Optional[str] = None
    template_id: Optional[str] = None
    active: Optional[int] = None
    name: Optional[str] = None
    subject: Optional[str] = None
    html_content: Optional[str] = None
    plain_content: Optional[str] = None
    generate_plain_content: Optional[bool] = None
    editor: Optional[str] = None
    test_data: Optional[str] = None
    updated_at: Optional[str] = None
    thumbnail_url: Optional[str] = None

    _FIELDS = (
        "id",
        "template_id",
        "active",
        "name",
        "subject",
        "html_content",
        "plain_content",
        "generate_plain_content",
        "editor",
        "test_data",
        "updated_at",
        "thumbnail_url",
    )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for key in self._FIELDS:
            _put(data, key, getattr(self, key))
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TemplateVersion":
        if not isinstance(data, dict):
            raise TypeError(f"Expected a JSON object, got {type(data).__name__}")
        return cls(**{key: data.get(key) for key in cls._FIELDS})


@dataclass
class Template:
    """A transactional template and its versions, oldest first as returned."""

    id: str
    name: str = ""
    generation: str = DYNAMIC_GENERATION
    updated_at: Optional[str] = None
    versions: List[TemplateVersion] = field(default_factory=list)

    @property
    def active_version(self) -> Optional[TemplateVersion]:
        for version in self.versions:
            if version.active == 1:
                return version
        return None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "generation": self.generation,
            "versions": [version.to_dict() for version in self.versions],
        }
        _put(data, "updated_at", self.updated_at)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Template":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            generation=data.get("generation", DYNAMIC_GENERATION),
            updated_at=data.get("updated_at"),
            versions=[TemplateVersion.from_dict(v) for v in data.get("versions") or []],
        )


@dataclass
class TemplateVersionRequest:
    """Body of a ``POST /templates/{id}/versions`` request."""

    template_id: str
    name: str
    subject: str
    active: Optional[int] = 1
    html_content: Optional[str] = None
    plain_content: Optional[str] = None
    generate_plain_content: Optional[bool] = True
    editor: Optional[str] = "code"
    test_data: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "template_id": self.template_id,
            "name": self.name,
            "subject": self.subject,
        }
        _put(data, "active", self.active)
        _put(data, "html_content", self.html_content)
        _put(data, "plain_content", self.plain_content)
        _put(data, "generate_plain_content", self.generate_plain_content)
        _put(data, "editor", self.editor)
        _put(data, "test_data", self.test_data)
        return data


@dataclass
class CreateTemplateRequest:
    """Body of a ``POST /templates`` request. Only dynamic templates are supported."""

    name: str
    generation: str = DYNAMIC_GENERATION

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "generation": self.generation}


@dataclass
class CreateTemplateResponse:
    template_id: Optional[str] = None


@dataclass
class ErrorResponse:
    """Structured error body returned with HTTP 400."""

    description: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ErrorResponse":
        description = data["description"]
        if not isinstance(description, str):
            raise TypeError("'description' must be a string")
        return cls(description=description)
