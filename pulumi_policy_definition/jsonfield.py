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

import json
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Union

from .errors import InvalidJsonField


class RawJson(NamedTuple):
    """
    An opaque JSON field as it appears at the configuration boundary: a string of JSON text.
    """
    text: str


class ParsedJson(NamedTuple):
    """
    An opaque JSON field as it is exchanged with the remote API: a structured document.
    """
    document: Any


OpaqueJson = Union[RawJson, ParsedJson]


def expand_json_from_string(field: str, text: str) -> ParsedJson:
    """
    Parses the JSON text held by `field` into a structured document. Raises `InvalidJsonField`
    naming the field if the text is not valid JSON.
    """
    try:
        return ParsedJson(json.loads(text))
    except (TypeError, ValueError) as e:
        raise InvalidJsonField(field, str(e)) from e


def flatten_json_to_string(document: Any) -> str:
    """
    Serializes a structured document to its canonical text form: sorted keys and no
    insignificant whitespace, so that equal documents always produce equal text.
    """
    return json.dumps(_plain_property(document), sort_keys=True, separators=(",", ":"))


def to_parsed(field: str, value: Optional[OpaqueJson]) -> Optional[ParsedJson]:
    """
    Converts a field value to the form submitted to the remote API. Empty text is treated as
    "not set" and yields `None`, so the field is left out of the request entirely.
    """
    if value is None:
        return None
    if isinstance(value, ParsedJson):
        return value
    if not value.text:
        return None
    return expand_json_from_string(field, value.text)


def to_raw(value: Optional[OpaqueJson]) -> Optional[RawJson]:
    """
    Converts a field value to the form stored in state. A null document yields `None` rather
    than empty text.
    """
    if value is None:
        return None
    if isinstance(value, RawJson):
        return value
    if value.document is None:
        return None
    return RawJson(flatten_json_to_string(value.document))


def normalize_json_string(text: Optional[str]) -> str:
    """
    Returns the canonical form of `text`, or "" when it is empty. Text that doesn't parse is
    returned unchanged so that it still compares unequal to any valid document.
    """
    if not text:
        return ""
    try:
        return flatten_json_to_string(json.loads(text))
    except (TypeError, ValueError):
        return text


def json_equal(old: Optional[str], new: Optional[str]) -> bool:
    """
    Reports whether two JSON texts hold structurally equal documents. Whitespace and key order
    are ignored, and empty text is equal to a missing value.
    """
    return normalize_json_string(old) == normalize_json_string(new)


def _plain_property(prop: Any) -> Any:
    # Documents returned by the remote API may use any Mapping or sequence type; unwrap them
    # to plain dicts and lists so they can be dumped.
    if isinstance(prop, (list, tuple)):
        elems: List[Any] = []
        for e in prop:
            elems.append(_plain_property(e))
        return elems

    if isinstance(prop, Mapping):
        result: Dict[str, Any] = {}
        for key in prop:
            if not isinstance(key, str):
                raise TypeError(f"Expected JSON object keys to be strings, got {type(key).__name__}")
            result[key] = _plain_property(prop[key])
        return result

    if prop is not None and not isinstance(prop, (str, bool, int, float)):
        raise TypeError(f"Serializing values of type {type(prop).__name__} not supported in a JSON field")

    return prop
