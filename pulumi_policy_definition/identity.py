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

from typing import NamedTuple

from .errors import MalformedIdentifier

# _ID_SEGMENTS is the number of `/`-separated segments in a policy definition ID, counting the
# empty segment before the leading slash:
# /subscriptions/{subscriptionId}/providers/Microsoft.Authorization/policyDefinitions/{name}
_ID_SEGMENTS = 7

_NAME_SEGMENT = 6

_PROVIDER_NAMESPACE = "Microsoft.Authorization"

_RESOURCE_TYPE = "policyDefinitions"


class PolicyDefinitionId(NamedTuple):
    subscription_id: str
    name: str

    def __str__(self) -> str:
        return (f"/subscriptions/{self.subscription_id}/providers/{_PROVIDER_NAMESPACE}"
                f"/{_RESOURCE_TYPE}/{self.name}")


def encode(name: str, subscription_id: str) -> str:
    """
    Builds the canonical identifier of the policy definition `name`. In normal operation the
    identifier is taken from the remote API's response instead; this is used when importing
    existing definitions by name.
    """
    if not name or not isinstance(name, str):
        raise TypeError("Expected name to be a non-empty string")
    if not subscription_id or not isinstance(subscription_id, str):
        raise TypeError("Expected subscription_id to be a non-empty string")
    return str(PolicyDefinitionId(subscription_id, name))


def parse(locator: str) -> PolicyDefinitionId:
    """
    Splits a persisted identifier into its subscription and name. Only the number of segments
    is checked; the name itself is taken verbatim.
    """
    components = locator.split("/") if locator else []

    if not components:
        raise MalformedIdentifier(
            locator, f"Azure Policy Definition Id is empty or not formatted correctly: {locator}")

    if len(components) != _ID_SEGMENTS:
        raise MalformedIdentifier(
            locator,
            f"Azure Policy Definition Id should have {_ID_SEGMENTS - 1} segments, "
            f"got {len(components) - 1}: '{locator}'")

    return PolicyDefinitionId(components[2], components[_NAME_SEGMENT])


def decode(locator: str) -> str:
    """
    Returns the policy definition name held in the final segment of `locator`.
    """
    return parse(locator).name
