"""Exceptions raised by the report pipeline."""

from __future__ import annotations


class EcowittError(Exception):
    """Base class for report pipeline failures."""


class AuthenticationError(EcowittError):
    """The submission's PASSKEY does not belong to this station."""


class MalformedPayloadError(EcowittError):
    """The submission cannot be decoded into a canonical record."""


class UnknownSensorTypeError(EcowittError):
    """A discovered sensor type has no entity constructor."""

    def __init__(self, type_tag: str) -> None:
        super().__init__(f"No entity constructor for sensor type {type_tag!r}.")
        self.type_tag = type_tag
