"""
A collection of Pydantic validators
See https://docs.pydantic.dev/latest/concepts/validators/#reusing-validators
"""

from datetime import UTC, datetime


def email_normalizer(email: str | None) -> str | None:
    """
    Normalize the email address by lowercasing it. We also remove trailing spaces.
    This function is intended to be used as a Pydantic validator.
    """
    if email is not None:
        return email.lower().strip()
    return email


def trailing_spaces_remover(value: str | None) -> str | None:
    """
    Remove trailing spaces.

    If the value is None, it is returned as is. The validator can thus be used for optional values.

    This function is intended to be used as a Pydantic validator.
    """
    if value is not None:
        return value.strip()
    return value


def not_blank(value: str | None) -> str | None:
    """
    Refuse strings made only of whitespaces. None is accepted, use a required field to refuse it.

    This function is intended to be used as a Pydantic validator.
    """
    # We need to raise a ValueError for Pydantic to catch it and return an error response
    if value is not None and not value.strip():
        raise ValueError("The value must not be blank")  # noqa: TRY003
    return value


def utc_if_naive(value: datetime | None) -> datetime | None:
    """
    Datetimes sent without timezone are considered to be UTC.
    Models only accept timezone aware datetimes.

    This function is intended to be used as a Pydantic validator, in `after` mode.
    """
    if value is not None and (value.tzinfo is None or value.utcoffset() is None):
        return value.replace(tzinfo=UTC)
    return value
