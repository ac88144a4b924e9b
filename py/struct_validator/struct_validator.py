# Copyright (c) 2025 Voxgig Ltd. MIT LICENSE.
#
# Struct Validator
# ================
#
# Validate in-memory JSON-like data against a shape specification made of
# plain maps, lists and strings. See spec.py for the spec syntax.
#
# Main utilities
# - validate: validate data against a spec, raising the first violation.
#
# Minor utilities
# - ismap, islist: identify value kinds.
# - typify: runtime type name of a value.
# - keysof: keys of a map, in insertion order.
# - strval: string form of a value, as used for enum matching.
# - pathify: render a key path as a string.


from typing import *
import logging
import math

from .errors import (
    EmptyCollection,
    InvalidEnumValue,
    InvalidSpecification,
    MissingRequiredField,
    TypeMismatch,
    UnexpectedField,
)
from .spec import (
    AnyArray,
    AnyObject,
    ArrayOf,
    Invalid,
    ObjectOf,
    Primitive,
    S_MARKER,
    S_array,
    S_boolean,
    S_function,
    S_null,
    S_number,
    S_object,
    S_string,
    parse_spec,
)


logger = logging.getLogger(__name__)


# Option names.
S_unknown = 'unknown'
S_path = 'path'
S_nullspec = 'nullspec'
S_marker = 'marker'

# Option values.
S_ignore = 'ignore'
S_warn = 'warn'
S_reject = 'reject'
S_accept = 'accept'
S_dot = 'dot'
S_index = 'index'

# General strings.
S_MT = ''
S_DT = '.'
S_true = 'true'
S_false = 'false'


# The standard undefined value for this language.
UNDEF = None

DEFAULT_OPTS = {
    S_unknown: S_ignore,
    S_path: S_dot,
    S_nullspec: S_accept,
    S_marker: S_MARKER,
}

ALLOWED_OPTS = {
    S_unknown: (S_ignore, S_warn, S_reject),
    S_path: (S_dot, S_index),
    S_nullspec: (S_accept, S_reject),
}


class ValidateState:
    """
    Traversal state for one validate call. Child states share the options
    and extend the path.
    """
    def __init__(
        self,
        path: List[Union[str, int]],  # Keys from the root to the current node.
        required: bool,               # Current node must be present.
        opts: Dict[str, Any],         # Resolved options.
    ) -> None:
        self.path = path
        self.required = required
        self.opts = opts

    def child(self, key: Union[str, int], required: bool) -> 'ValidateState':
        return ValidateState(self.path + [key], required, self.opts)

    def pathstr(self, key: Any = UNDEF) -> str:
        path = self.path if UNDEF == key else self.path + [key]
        return pathify(path, self.opts[S_path])


def ismap(val: Any = UNDEF) -> bool:
    "Value is a defined map (hash)."
    return isinstance(val, dict)


def islist(val: Any = UNDEF) -> bool:
    "Value is a defined list (array)."
    return isinstance(val, list)


def typify(value: Any = UNDEF) -> str:
    if value is UNDEF:
        return S_null
    if isinstance(value, bool):
        return S_boolean
    if isinstance(value, (int, float)):
        return S_number
    if isinstance(value, str):
        return S_string
    if isinstance(value, list):
        return S_array
    if isinstance(value, dict):
        return S_object
    if callable(value):
        return S_function

    # Not a JSON type: report the Python type name.
    return type(value).__name__


def keysof(val: Any = UNDEF) -> List[Any]:
    "Keys of a map in insertion order, or indexes of a list."
    if ismap(val):
        return list(val.keys())
    elif islist(val):
        return list(range(len(val)))
    return []


def strval(val: Any = UNDEF) -> str:
    """
    String form of a scalar value, as compared against enum alternatives:
    booleans are lower case, and integral floats have no fraction.
    """
    if UNDEF == val:
        return S_null
    if isinstance(val, str):
        return val
    if isinstance(val, bool):
        return S_true if val else S_false
    if isinstance(val, float) and math.isfinite(val) and val.is_integer():
        return str(int(val))
    return str(val)


def pathify(path: List[Any], style: str = S_dot) -> str:
    """
    Render a key path. Field names are joined with '.', and indexes are
    appended as '.N' (dot style) or '[N]' (index style). The root is ''.
    """
    pathstr = S_MT

    for part in path:
        if isinstance(part, int) and not isinstance(part, bool):
            pathstr += f'[{part}]' if S_index == style else f'{S_DT}{part}'
        else:
            pathstr += f'{S_DT}{part}' if S_MT != pathstr else str(part)

    return pathstr


def resolve_opts(opts: Any = UNDEF) -> Dict[str, Any]:
    "Merge options over the defaults, rejecting unknown names and values."
    out = dict(DEFAULT_OPTS)

    if UNDEF == opts:
        return out

    if not ismap(opts):
        raise ValueError(f'Invalid options: expected a map, got {typify(opts)}')

    for name, val in opts.items():
        if name not in DEFAULT_OPTS:
            raise ValueError(f'Unknown option: {name}')

        allowed = ALLOWED_OPTS.get(name)
        if allowed is not None and val not in allowed:
            raise ValueError(
                f"Invalid value for option {name}: expected one of [{', '.join(allowed)}], got {val}")

        if S_marker == name and (not isinstance(val, str) or S_MT == val):
            raise ValueError(f'Invalid value for option {name}: expected a non-empty string')

        out[name] = val

    return out


def validate_PRIMITIVE(state: ValidateState, value: Any, node: Primitive) -> None:
    """
    A value of a primitive type, optionally restricted to enum choices.
    """
    t = typify(value)

    if t != node.typename:
        raise TypeMismatch(state.pathstr(), node.typename, t)

    if node.choices is not None:
        vs = strval(value)
        if vs not in node.choices:
            raise InvalidEnumValue(state.pathstr(), node.choices, vs)


def validate_ARRAY(state: ValidateState, value: Any, node: Union[AnyArray, ArrayOf]) -> None:
    """
    A list. Elements, if an item spec is given, are always required.
    """
    if not islist(value):
        raise TypeMismatch(state.pathstr(), S_array, typify(value))

    if state.required and 0 == len(value):
        raise EmptyCollection(state.pathstr(), S_array)

    if isinstance(node, AnyArray):
        return

    for i, item in enumerate(value):
        validate_node(state.child(i, True), item, node.item)


def validate_OBJECT(state: ValidateState, value: Any, node: Union[AnyObject, ObjectOf]) -> None:
    """
    A map. Spec fields are checked in declared order; a required empty map
    counts as missing content. An optional "object" accepts any value.
    """
    if not state.required and isinstance(node, AnyObject):
        return

    if not ismap(value):
        raise TypeMismatch(state.pathstr(), S_object, typify(value))

    if state.required and 0 == len(value):
        raise EmptyCollection(state.pathstr(), S_object)

    if isinstance(node, AnyObject):
        return

    for fkey, childspec in node.fields:
        if fkey.name in value:
            validate_node(state.child(fkey.name, fkey.required), value[fkey.name], childspec)
        elif fkey.required:
            raise MissingRequiredField(state.pathstr(fkey.name))

    _check_unknown(state, value, node)


def validate_node(state: ValidateState, value: Any, spec: Any) -> None:
    if UNDEF == value:
        if state.required:
            raise MissingRequiredField(state.pathstr())
        return

    if UNDEF == spec:
        if S_reject == state.opts[S_nullspec]:
            raise InvalidSpecification(state.pathstr(), 'spec is null')
        return

    node = parse_spec(spec, state.opts[S_marker])

    if isinstance(node, Primitive):
        validate_PRIMITIVE(state, value, node)

    elif isinstance(node, (AnyArray, ArrayOf)):
        validate_ARRAY(state, value, node)

    elif isinstance(node, (AnyObject, ObjectOf)):
        validate_OBJECT(state, value, node)

    elif isinstance(node, Invalid):
        raise InvalidSpecification(state.pathstr(), node.reason)


# Validate a data structure against a shape specification. Returns None
# when the data conforms, otherwise raises a ValidationError describing the
# first violation found in a depth-first walk of the spec, in declared key
# order. The required flag applies to the top level value itself: an empty
# top level map or list is rejected unless required is False.
def validate(data: Any, spec: Any, required: bool = True, opts: Any = UNDEF) -> None:
    state = ValidateState([], required, resolve_opts(opts))
    validate_node(state, data, spec)


# Internal utilities
# ==================

# Apply the unknown field policy to data keys that the spec does not name.
# A data key counts as named if it equals a spec key, with or without the
# required marker.
def _check_unknown(state, value, node):
    policy = state.opts[S_unknown]
    if S_ignore == policy:
        return

    named = set()
    for fkey, _ in node.fields:
        named.add(fkey.key)
        named.add(fkey.name)

    for key in keysof(value):
        if key in named:
            continue

        keypath = state.pathstr(key)
        if S_reject == policy:
            raise UnexpectedField(keypath)

        logger.warning('Unexpected field: %s', keypath)


# Static holder, for callers that prefer a class interface.
class StructValidator:
    validate = staticmethod(validate)


__all__ = [
    'DEFAULT_OPTS',
    'StructValidator',
    'ValidateState',
    'islist',
    'ismap',
    'keysof',
    'pathify',
    'resolve_opts',
    'strval',
    'typify',
    'validate',
    'validate_ARRAY',
    'validate_OBJECT',
    'validate_PRIMITIVE',
    'validate_node',
]
