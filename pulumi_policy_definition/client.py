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

from abc import ABC, abstractmethod
from typing import Any, Optional

_HTTP_NOT_FOUND = 404


class ClientError(Exception):
    """
    An error returned by the remote management API. `status_code` is the HTTP-like status of
    the failed request, or None when the request never produced a response.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (status {self.status_code})"


class NotFoundError(ClientError):
    """
    The requested policy definition does not exist (or is not visible yet).
    """

    def __init__(self, message: str = "policy definition not found"):
        super().__init__(message, _HTTP_NOT_FOUND)


class PolicyDefinition:
    """
    PolicyDefinition is a policy definition as exchanged with the remote API. Opaque JSON fields
    hold structured documents, or None when unset.
    """

    id: Optional[str]
    """
    The identifier assigned by the remote API. Unset on requests.
    """

    name: str
    """
    The name of the policy definition.
    """

    policy_type: Optional[str]
    """
    One of "BuiltIn", "Custom" or "NotSpecified".
    """

    mode: Optional[str]
    """
    One of "All", "Indexed" or "NotSpecified".
    """

    display_name: Optional[str]
    description: Optional[str]
    policy_rule: Optional[Any]
    metadata: Optional[Any]
    parameters: Optional[Any]

    def __init__(self,
                 name: str,
                 policy_type: Optional[str] = None,
                 mode: Optional[str] = None,
                 display_name: Optional[str] = None,
                 description: Optional[str] = None,
                 policy_rule: Optional[Any] = None,
                 metadata: Optional[Any] = None,
                 parameters: Optional[Any] = None,
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

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PolicyDefinition):
            return NotImplemented
        return vars(self) == vars(other)

    def __repr__(self) -> str:
        return f"PolicyDefinition(name={self.name!r}, id={self.id!r})"


class PolicyDefinitionsClient(ABC):
    """
    The operations the reconciler needs from the remote management API. Implementations own
    transport, authentication and serialization; they must raise `NotFoundError` (rather than
    a generic `ClientError`) whenever the named definition does not exist. An instance is used
    for sequential calls only.
    """

    @abstractmethod
    def get(self, name: str) -> PolicyDefinition:
        """
        Returns the policy definition `name` as currently observed by the remote API.
        """

    @abstractmethod
    def create_or_update(self, name: str, definition: PolicyDefinition) -> PolicyDefinition:
        """
        Creates or replaces the policy definition `name`. The returned definition carries the
        remote identifier; the write may not be visible to `get` right away.
        """

    @abstractmethod
    def delete(self, name: str) -> None:
        """
        Deletes the policy definition `name`.
        """
