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

from typing import Optional


class PolicyDefinitionError(Exception):
    """
    Base class for errors raised while reconciling a policy definition. Every error carries a
    human readable `message` naming the record and the operation that failed.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MalformedIdentifier(PolicyDefinitionError):
    """
    Raised when a persisted identifier can't be decoded into a policy definition name. This
    points at a caller bug or corrupted state rather than a remote failure.
    """

    def __init__(self, locator: str, message: str):
        super().__init__(message)
        self.locator = locator


class InvalidFieldValue(PolicyDefinitionError):
    """
    Raised when a field fails schema validation, e.g. a required field is missing or an
    enumerated field holds a value outside of its allowed set.
    """

    def __init__(self, field: str, reason: str):
        super().__init__(f"invalid value for `{field}`: {reason}")
        self.field = field
        self.reason = reason


class InvalidJsonField(PolicyDefinitionError):
    """
    Raised when an opaque JSON field holds text that doesn't parse as JSON.
    """

    def __init__(self, field: str, detail: str):
        super().__init__(f"unable to parse {field}: {detail}")
        self.field = field
        self.detail = detail


class RemoteRejected(PolicyDefinitionError):
    """
    Raised when the remote API declines a create or update. The adapter's error is kept as
    `error` (and chained as the cause) so its status and message reach the caller unchanged.
    """

    def __init__(self, name: str, error: Exception):
        super().__init__(f"Error creating or updating Policy Definition {name!r}: {error}")
        self.name = name
        self.error = error

    @property
    def status_code(self) -> Optional[int]:
        return getattr(self.error, "status_code", None)


class PropagationTimeout(PolicyDefinitionError):
    """
    Raised when a write was accepted but didn't become consistently visible before the
    deadline. Callers may retry the whole operation.
    """

    def __init__(self, name: str, timeout: float):
        super().__init__(f"Error waiting for Policy Definition {name!r} to become available: "
                         f"timeout while waiting for state to become '200' (timeout: {timeout}s)")
        self.name = name
        self.timeout = timeout


class UnexpectedState(PolicyDefinitionError):
    """
    Raised when a poll observes a status that is neither pending nor the target.
    """

    def __init__(self, name: str, status: str):
        super().__init__(f"Error waiting for Policy Definition {name!r} to become available: "
                         f"unexpected state '{status}'")
        self.name = name
        self.status = status


class OperationCancelled(PolicyDefinitionError):
    def __init__(self, name: str):
        super().__init__(f"Operation on Policy Definition {name!r} was cancelled")
        self.name = name


class RemoteReadFailed(PolicyDefinitionError):
    def __init__(self, name: str, error: Exception):
        super().__init__(f"Error reading Policy Definition {name!r}: {error}")
        self.name = name
        self.error = error


class RemoteDeleteFailed(PolicyDefinitionError):
    def __init__(self, name: str, error: Exception):
        super().__init__(f"Error deleting Policy Definition {name!r}: {error}")
        self.name = name
        self.error = error
