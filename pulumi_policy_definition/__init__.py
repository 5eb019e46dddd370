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

"""
Manages Azure-style policy definitions: validates their configuration, writes them through a
remote client, waits for eventually consistent reads to catch up and maps the observed object back
onto state. Usable directly through `PolicyDefinitionReconciler` or from a Pulumi program through
the `PolicyDefinition` dynamic resource.
"""

from .client import (
    ClientError,
    NotFoundError,
    PolicyDefinition as RemotePolicyDefinition,
    PolicyDefinitionsClient,
)

from .config import (
    ReconcilerSettings,
)

from .descriptor import (
    Field,
    FieldKind,
    POLICY_DEFINITION,
    PolicyDefinitionState,
    PolicyMode,
    PolicyType,
    ResourceDescriptor,
)

from .errors import (
    InvalidFieldValue,
    InvalidJsonField,
    MalformedIdentifier,
    OperationCancelled,
    PolicyDefinitionError,
    PropagationTimeout,
    RemoteDeleteFailed,
    RemoteReadFailed,
    RemoteRejected,
    UnexpectedState,
)

from .jsonfield import (
    ParsedJson,
    RawJson,
)

from .provider import (
    PolicyDefinition,
    PolicyDefinitionProvider,
)

from .reconciler import (
    PolicyDefinitionReconciler,
)

from .wait import (
    Clock,
)
