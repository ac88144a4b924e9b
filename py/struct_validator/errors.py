# Copyright (c) 2025 Voxgig Ltd. MIT LICENSE.
#
# Validation errors. All are ValueErrors, and the message text is stable:
# callers match on it.


from typing import *


class ValidationError(ValueError):
    "Data does not match the spec. Only the first violation is reported."

    def __init__(self, path: str, message: str) -> None:
        super().__init__(message)
        self.path = path
        self.message = message


class MissingRequiredField(ValidationError):
    def __init__(self, path: str) -> None:
        super().__init__(path, f'Missing required field: {path}')


class TypeMismatch(ValidationError):
    def __init__(self, path: str, expected: str, actual: str) -> None:
        super().__init__(
            path, f'Invalid type for {path}: expected {expected}, got {actual}')
        self.expected = expected
        self.actual = actual


class EmptyCollection(ValidationError):
    def __init__(self, path: str, kind: str) -> None:
        super().__init__(path, f'{kind.capitalize()} cannot be empty: {path}')
        self.kind = kind


class InvalidEnumValue(ValidationError):
    def __init__(self, path: str, allowed: List[str], actual: Any) -> None:
        super().__init__(
            path,
            f"Invalid value for {path}: expected one of [{', '.join(allowed)}], got {actual}")
        self.allowed = allowed
        self.actual = actual


class UnexpectedField(ValidationError):
    def __init__(self, path: str) -> None:
        super().__init__(path, f'Unexpected field: {path}')


class InvalidSpecification(ValidationError):
    """
    The spec itself is malformed. Raised like a data violation, but callers
    can catch it first to tell a bad schema from bad input.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(path, f'Invalid specification for {path}: {reason}')
        self.reason = reason


__all__ = [
    'EmptyCollection',
    'InvalidEnumValue',
    'InvalidSpecification',
    'MissingRequiredField',
    'TypeMismatch',
    'UnexpectedField',
    'ValidationError',
]
