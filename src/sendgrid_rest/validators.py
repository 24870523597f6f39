"""Email address validation utilities."""

from typing import List, Optional, Tuple

from email_validator import EmailNotValidError, validate_email

from .models import EmailAddress


def validate_email_address(email: str) -> Tuple[bool, str]:
    """Validate an email address.

    Args:
        email: Email address to validate

    Returns:
        Tuple of (is_valid, normalized_address or error_message)
    """
    try:
        valid = validate_email(email, check_deliverability=False)
        return True, valid.normalized
    except EmailNotValidError as e:
        return False, str(e)


def parse_addresses(values: List[str], names: Optional[List[str]] = None) -> List[EmailAddress]:
    """Build EmailAddress objects from raw strings.

    Args:
        values: Email addresses
        names: Optional display names, matched by position

    Returns:
        List of normalized addresses

    Raises:
        ValueError: If any address is invalid
    """
    names = names or []
    addresses = []
    for index, value in enumerate(values):
        is_valid, result = validate_email_address(value)
        if not is_valid:
            raise ValueError(f"Invalid email address {value!r}: {result}")
        name = names[index] if index < len(names) else None
        addresses.append(EmailAddress(email=result, name=name))
    return addresses
