# struct_validator init

from .errors import (
    EmptyCollection,
    InvalidEnumValue,
    InvalidSpecification,
    MissingRequiredField,
    TypeMismatch,
    UnexpectedField,
    ValidationError,
)
from .spec import (
    parse_choices,
    parse_field_spec,
    parse_required,
    parse_spec,
)
from .struct_validator import (
    StructValidator,
    pathify,
    strval,
    typify,
    validate,
)


__all__ = [
    'EmptyCollection',
    'InvalidEnumValue',
    'InvalidSpecification',
    'MissingRequiredField',
    'StructValidator',
    'TypeMismatch',
    'UnexpectedField',
    'ValidationError',
    'parse_choices',
    'parse_field_spec',
    'parse_required',
    'parse_spec',
    'pathify',
    'strval',
    'typify',
    'validate',
]
