# Copyright 2016-2025, Pulumi Corporation.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from enum import Enum
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Tuple

from pulumi.runtime import rpc

from .client import PolicyDefinition
from .errors import InvalidFieldValue, PolicyDefinitionError
from .jsonfield import ParsedJson, RawJson, expand_json_from_string, to_parsed, to_raw


class FieldKind(Enum):
    """
    The kind of value a field holds.
    """

    STRING = "string"
    ENUM = "enum"
    JSON = "json"


class PolicyType(Enum):
    BUILT_IN = "BuiltIn"
    CUSTOM = "Custom"
    NOT_SPECIFIED = "NotSpecified"


class PolicyMode(Enum):
    ALL = "All"
    INDEXED = "Indexed"
    NOT_SPECIFIED = "NotSpecified"


class Field:
    """
    Describes a single field of a resource.
    """

    name: str
    """
    The property key. Unique within a descriptor; also the attribute name on the typed records.
    """

    kind: FieldKind
    """
    The kind of value the field holds.
    """

    required: bool
    """
    Whether the field must be set to a non-empty value.
    """

    immutable: bool
    """
    Whether the field can only be set at creation. Changing it forces a replacement.
    """

    allowed_values: List[str]
    """
    The canonical spellings an enumerated field may take. Matching is case-insensitive.
    """

    def __init__(self,
                 name: str,
                 kind: FieldKind,
                 required: bool = False,
                 immutable: bool = False,
                 allowed_values: Optional[List[str]] = None) -> None:
        if not name:
            raise TypeError("Missing name argument")
        if not isinstance(name, str):
            raise TypeError("Expected name to be a string")
        if not isinstance(kind, FieldKind):
            raise TypeError("Expected kind to be a FieldKind")
        if kind == FieldKind.ENUM:
            if not allowed_values:
                raise TypeError(f"Enumerated field {name} must declare its allowed values")
            for v in allowed_values:
                if not isinstance(v, str):
                    raise TypeError(f"Expected allowed values of {name} to be strings")
        elif allowed_values is not None:
            raise TypeError(f"Only enumerated fields may declare allowed values, but {name} is {kind.value}")
        self.name = name
        self.kind = kind
        self.required = required
        self.immutable = immutable
        self.allowed_values = allowed_values if allowed_values is not None else []

    def normalize(self, value: str) -> Optional[str]:
        """
        Returns the canonical spelling of `value` for an enumerated field, or None when it is not
        one of the allowed values.
        """
        for allowed in self.allowed_values:
            if allowed.lower() == value.lower():
                return allowed
        return None


class FieldFailure(NamedTuple):
    field: str
    error: PolicyDefinitionError


class ResourceDescriptor:
    """
    Declares the fields of a resource and validates property bags against them.
    """

    def __init__(self, fields: List[Field]) -> None:
        if not fields:
            raise TypeError("Missing fields argument")
        names = set()
        for f in fields:
            if not isinstance(f, Field):
                raise TypeError("Expected each field in fields to be a Field")
            if f.name in names:
                raise TypeError(f"Duplicate field {f.name}")
            names.add(f.name)
        self.fields = fields
        self.__by_name = {f.name: f for f in fields}

    def __getitem__(self, name: str) -> Field:
        return self.__by_name[name]

    def immutable_fields(self) -> List[Field]:
        return [f for f in self.fields if f.immutable]

    def validate(self, props: Mapping[str, Any]) -> Tuple[Dict[str, Any], List[FieldFailure]]:
        """
        Checks `props` against every field in declaration order. Returns a copy of `props` with
        enumerated values normalized to their canonical spelling, along with the failures found.
        Keys that aren't declared fields are passed through untouched, and so are values that
        aren't known yet during a preview.
        """
        inputs: Dict[str, Any] = dict(props)
        failures: List[FieldFailure] = []

        for f in self.fields:
            value = props.get(f.name)

            if value == rpc.UNKNOWN:
                continue

            if value is None or value == "":
                if f.required:
                    failures.append(FieldFailure(f.name, InvalidFieldValue(
                        f.name, f"Missing required property '{f.name}'")))
                continue

            if not isinstance(value, str):
                failures.append(FieldFailure(f.name, InvalidFieldValue(
                    f.name, f"Expected {f.name} to be a string, got {type(value).__name__}")))
                continue

            if f.kind == FieldKind.ENUM:
                normalized = f.normalize(value)
                if normalized is None:
                    failures.append(FieldFailure(f.name, InvalidFieldValue(
                        f.name, f"expected {f.name} to be one of {f.allowed_values}, got {value}")))
                    continue
                inputs[f.name] = normalized
            elif f.kind == FieldKind.JSON:
                try:
                    expand_json_from_string(f.name, value)
                except PolicyDefinitionError as e:
                    failures.append(FieldFailure(f.name, e))

        return inputs, failures


POLICY_DEFINITION = ResourceDescriptor([
    Field("name", FieldKind.STRING, required=True, immutable=True),
    Field("policy_type", FieldKind.ENUM, required=True, immutable=True,
          allowed_values=[t.value for t in PolicyType]),
    Field("mode", FieldKind.ENUM, required=True, immutable=True,
          allowed_values=[m.value for m in PolicyMode]),
    Field("display_name", FieldKind.STRING, required=True),
    Field("description", FieldKind.STRING),
    Field("policy_rule", FieldKind.JSON),
    Field("metadata", FieldKind.JSON),
    Field("parameters", FieldKind.JSON),
])
"""
The schema of a policy definition. `name`, `policy_type` and `mode` can't change once the
definition exists.
"""


class PolicyDefinitionState:
    """
    PolicyDefinitionState is a policy definition as configured by the user and persisted in
    state. Opaque JSON fields hold JSON text.
    """

    id: Optional[str]
    """
    The identifier assigned by the remote API, once the definition exists.
    """

    name: Optional[str]
    policy_type: Optional[str]
    mode: Optional[str]
    display_name: Optional[str]
    description: Optional[str]
    policy_rule: Optional[str]
    metadata: Optional[str]
    parameters: Optional[str]

    def __init__(self,
                 name: Optional[str] = None,
                 policy_type: Optional[str] = None,
                 mode: Optional[str] = None,
                 display_name: Optional[str] = None,
                 description: Optional[str] = None,
                 policy_rule: Optional[str] = None,
                 metadata: Optional[str] = None,
                 parameters: Optional[str] = None,
                 id: Optional[str] = None) -> None:  # pylint: disable=redefined-builtin
        self.id = id
        self.name = name
        self.policy_type = policy_type
        self.mode = mode
        self.display_name = display_name
        self.description = description
        self.policy_rule = policy_rule
        self.metadata = metadata
        self.parameters = parameters

    @staticmethod
    def from_props(props: Mapping[str, Any], id: Optional[str] = None) -> 'PolicyDefinitionState':  # pylint: disable=redefined-builtin
        state = PolicyDefinitionState(id=id)
        for f in POLICY_DEFINITION.fields:
            setattr(state, f.name, props.get(f.name))
        return state

    def to_props(self) -> Dict[str, Any]:
        """
        Returns the fields as a property bag. Every declared field is present, with None for
        those that are unset.
        """
        return {f.name: getattr(self, f.name) for f in POLICY_DEFINITION.fields}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PolicyDefinitionState):
            return NotImplemented
        return vars(self) == vars(other)

    def __repr__(self) -> str:
        return f"PolicyDefinitionState(name={self.name!r}, id={self.id!r})"


def to_definition(state: PolicyDefinitionState) -> PolicyDefinition:
    """
    Builds the request body for `state`. JSON fields are parsed into documents and empty text
    leaves them out; unset strings are sent as "".
    """
    definition = PolicyDefinition(state.name)
    for f in POLICY_DEFINITION.fields:
        value = getattr(state, f.name)
        if f.kind == FieldKind.JSON:
            parsed = to_parsed(f.name, RawJson(value) if value is not None else None)
            value = parsed.document if parsed is not None else None
        elif f.kind == FieldKind.STRING and value is None:
            value = ""
        setattr(definition, f.name, value)
    return definition


def from_definition(definition: PolicyDefinition,
                    prior: Optional[PolicyDefinitionState] = None) -> PolicyDefinitionState:
    """
    Maps an observed definition onto state. Strings are copied as-is. JSON fields are flattened to
    canonical text only when the remote value is non-null; otherwise the prior value is kept.
    """
    state = PolicyDefinitionState(id=definition.id)
    for f in POLICY_DEFINITION.fields:
        value = getattr(definition, f.name)
        if f.kind == FieldKind.JSON:
            if value is None:
                value = getattr(prior, f.name) if prior is not None else None
            else:
                raw = to_raw(ParsedJson(value))
                value = raw.text if raw is not None else None
        setattr(state, f.name, value)
    return state
