# Copyright (c) 2025 Voxgig Ltd. MIT LICENSE.
#
# Spec parsing
# ============
#
# A spec is plain nested data:
# - "string", "number", "boolean": a primitive type name, optionally
#   followed by an enum clause: "string = a | b".
# - "object", "array": any object, any array (no further checks).
# - {"name$": spec, "note": spec}: an object, "$" marking required keys.
# - [spec]: an array, each element validated against spec.
#
# parse_spec turns one level of that into a tagged node. Children are left
# raw, and only parsed when validation reaches them.


from typing import *


S_string = 'string'
S_number = 'number'
S_boolean = 'boolean'
S_object = 'object'
S_array = 'array'
S_null = 'null'
S_function = 'function'

S_MARKER = '$'
S_EQ = '='
S_VB = '|'


class SpecNode:
    "Base of the parsed spec variants."

    def __repr__(self):
        attrs = ', '.join(f'{k}={v!r}' for k, v in vars(self).items())
        return f'{type(self).__name__}({attrs})'

    def __eq__(self, other):
        return type(self) is type(other) and vars(self) == vars(other)


class Primitive(SpecNode):
    "A type name, with optional enum choices. Unknown names match nothing."

    def __init__(self, typename: str, choices: Optional[List[str]] = None) -> None:
        self.typename = typename
        self.choices = choices


class AnyObject(SpecNode):
    "Bare 'object': any map, fields unchecked."


class AnyArray(SpecNode):
    "Bare 'array': any list, elements unchecked."


class ArrayOf(SpecNode):
    def __init__(self, item: Any) -> None:
        self.item = item


class ObjectOf(SpecNode):
    def __init__(self, fields: List[Tuple['FieldKey', Any]]) -> None:
        self.fields = fields


class Invalid(SpecNode):
    def __init__(self, reason: str) -> None:
        self.reason = reason


class FieldKey:
    """
    A parsed object spec key: the field name with the required marker removed.
    """
    __slots__ = ('key', 'name', 'required')

    def __init__(self, key: str, name: str, required: bool) -> None:
        self.key = key
        self.name = name
        self.required = required

    def __repr__(self):
        return f'FieldKey({self.key!r}, {self.name!r}, {self.required!r})'


def parse_required(key: str, marker: str = S_MARKER) -> Tuple[str, bool]:
    "Split the required marker from a key: 'name$' -> ('name', True)."
    if key.endswith(marker):
        return key[:-len(marker)], True
    return key, False


def parse_field_spec(spec: Any) -> Tuple[Optional[str], Optional[str]]:
    """
    Split a field specifier into its type name and enum clause.
    Only the first '=' separates; the clause is None when absent.
    """
    if isinstance(spec, str):
        parts = spec.split(S_EQ, 1)
        typename = parts[0].strip().lower()
        clause = parts[1].strip() if 1 < len(parts) else None
        return typename, clause

    if isinstance(spec, list):
        return S_array, None

    if isinstance(spec, dict):
        return S_object, None

    return None, None


def parse_choices(clause: str) -> List[str]:
    "Enum alternatives: 'a | b' -> ['a', 'b']."
    return [c.strip() for c in clause.split(S_VB)]


def parse_spec(spec: Any, marker: str = S_MARKER) -> SpecNode:
    """
    Parse one level of a raw spec into a SpecNode.
    Malformed specs are returned as Invalid, never raised, so that the
    caller can report them with the current path.
    """
    typename, clause = parse_field_spec(spec)

    if typename is None:
        return Invalid(f'unsupported spec of type {type(spec).__name__}')

    if isinstance(spec, str):
        if clause is None:
            if S_object == typename:
                return AnyObject()
            if S_array == typename:
                return AnyArray()
            return Primitive(typename)

        return Primitive(typename, parse_choices(clause))

    if isinstance(spec, list):
        if 1 != len(spec):
            return Invalid(f'array spec must have exactly one item spec, found {len(spec)}')
        return ArrayOf(spec[0])

    fields = []
    for key, child in spec.items():
        if not isinstance(key, str):
            return Invalid(f'object spec key must be a string, found {key!r}')
        name, required = parse_required(key, marker)
        fields.append((FieldKey(key, name, required), child))

    return ObjectOf(fields)


__all__ = [
    'AnyArray',
    'AnyObject',
    'ArrayOf',
    'FieldKey',
    'Invalid',
    'ObjectOf',
    'Primitive',
    'SpecNode',
    'parse_choices',
    'parse_field_spec',
    'parse_required',
    'parse_spec',
]
