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

import threading
from typing import Optional, Tuple

import pulumi

from .client import ClientError, NotFoundError, PolicyDefinition, PolicyDefinitionsClient
from .config import ReconcilerSettings
from .descriptor import POLICY_DEFINITION, PolicyDefinitionState, from_definition, to_definition
from .errors import RemoteDeleteFailed, RemoteReadFailed, RemoteRejected
from .identity import decode
from .wait import Clock, wait_for_state

# Polls map a successful read to "200" and a missing definition to "404".
_STATUS_FOUND = "200"
_STATUS_NOT_FOUND = "404"


class PolicyDefinitionReconciler:
    """
    Drives a remote policy definition towards a desired state. Operations against the same
    definition must not overlap; the reconciler holds no state between calls.
    """

    __client: PolicyDefinitionsClient
    __settings: ReconcilerSettings
    __clock: Clock

    def __init__(self,
                 client: PolicyDefinitionsClient,
                 settings: Optional[ReconcilerSettings] = None,
                 clock: Optional[Clock] = None) -> None:
        """
        :param PolicyDefinitionsClient client: The remote API.
        :param Optional[ReconcilerSettings] settings: How long to wait for writes to propagate.
        :param Optional[Clock] clock: The time source used while waiting.
        """
        if not isinstance(client, PolicyDefinitionsClient):
            raise TypeError("Expected client to be a PolicyDefinitionsClient")
        if settings is not None and not isinstance(settings, ReconcilerSettings):
            raise TypeError("Expected settings to be a ReconcilerSettings")
        self.__client = client
        self.__settings = settings if settings is not None else ReconcilerSettings()
        self.__clock = clock if clock is not None else Clock()

    def create_or_update(self,
                         desired: PolicyDefinitionState,
                         cancel: Optional[threading.Event] = None) -> PolicyDefinitionState:
        """
        Writes `desired`, waits until the write is consistently visible and returns the observed
        state, including the identifier to persist.
        """
        inputs, failures = POLICY_DEFINITION.validate(desired.to_props())
        if failures:
            raise failures[0].error
        desired = PolicyDefinitionState.from_props(inputs, desired.id)

        name = desired.name
        definition = to_definition(desired)

        try:
            written = self.__client.create_or_update(name, definition)
        except ClientError as e:
            raise RemoteRejected(name, e) from e

        # Policy Definitions are eventually consistent; wait for them to stabilize.
        pulumi.log.debug(f"Waiting for Policy Definition {name!r} to become available")
        wait_for_state(
            name,
            lambda: self._refresh(name),
            pending=[_STATUS_NOT_FOUND],
            target=[_STATUS_FOUND],
            timeout=self.__settings.propagation_timeout,
            poll_interval=self.__settings.poll_interval,
            continuous_target_occurrence=self.__settings.continuous_target_occurrence,
            clock=self.__clock,
            cancel=cancel)

        try:
            observed = self.__client.get(name)
        except ClientError as e:
            raise RemoteReadFailed(name, e) from e

        state = from_definition(observed, desired)
        if state.id is None:
            state.id = written.id
        return state

    def read(self,
             locator: str,
             prior: Optional[PolicyDefinitionState] = None) -> Optional[PolicyDefinitionState]:
        """
        Returns the current state of the definition identified by `locator`, or None if it no
        longer exists. JSON fields the remote API reports as null keep their value from `prior`.
        """
        name = decode(locator)

        try:
            observed = self.__client.get(name)
        except NotFoundError:
            pulumi.log.info(f"Error reading Policy Definition {locator!r} - removing from state")
            return None
        except ClientError as e:
            raise RemoteReadFailed(name, e) from e

        state = from_definition(observed, prior)
        if state.id is None:
            state.id = locator
        return state

    def import_(self, locator: str) -> PolicyDefinitionState:
        """
        Reads an existing definition so it can be brought under management.
        """
        state = self.read(locator)
        if state is None:
            name = decode(locator)
            raise RemoteReadFailed(name, NotFoundError(f"cannot import non-existent Policy Definition {locator!r}"))
        return state

    def delete(self, locator: str) -> None:
        """
        Deletes the definition identified by `locator`. Deleting a definition that is already
        gone succeeds.
        """
        name = decode(locator)

        try:
            self.__client.delete(name)
        except NotFoundError:
            return
        except ClientError as e:
            raise RemoteDeleteFailed(name, e) from e

    def _refresh(self, name: str) -> Tuple[Optional[PolicyDefinition], str]:
        try:
            return self.__client.get(name), _STATUS_FOUND
        except NotFoundError:
            return None, _STATUS_NOT_FOUND
        except ClientError as e:
            raise RemoteReadFailed(name, e) from e
