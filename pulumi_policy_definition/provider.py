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

from typing import Any, List, Mapping, Optional

import pulumi
from pulumi.dynamic import (
    CheckFailure,
    CheckResult,
    ConfigureRequest,
    CreateResult,
    DiffResult,
    ReadResult,
    Resource,
    ResourceProvider,
    UpdateResult,
)
from pulumi.runtime import rpc

from .client import PolicyDefinitionsClient
from .config import ReconcilerSettings
from .descriptor import POLICY_DEFINITION, Field, FieldKind, PolicyDefinitionState
from .jsonfield import json_equal
from .reconciler import PolicyDefinitionReconciler


class PolicyDefinitionProvider(ResourceProvider):
    """
    A dynamic provider that manages policy definitions through a `PolicyDefinitionsClient`.
    """

    def __init__(self,
                 client: PolicyDefinitionsClient,
                 settings: Optional[ReconcilerSettings] = None) -> None:
        """
        :param PolicyDefinitionsClient client: The remote API.
        :param Optional[ReconcilerSettings] settings: How long to wait for writes to propagate.
               Defaults to the `policy-definition` stack configuration.
        """
        super().__init__()
        self.client = client
        self.settings = settings

    def configure(self, req: ConfigureRequest) -> None:
        # The provider host has no stack config of its own; it arrives here instead.
        if self.settings is None:
            self.settings = ReconcilerSettings.from_configure_request(req)

    def check(self, _olds: Any, news: Any) -> CheckResult:
        inputs, failures = POLICY_DEFINITION.validate(news)
        return CheckResult(inputs, [CheckFailure(f.field, f.error.message) for f in failures])

    def diff(self, _id: str, olds: Any, news: Any) -> DiffResult:
        changed: List[str] = []
        replaces: List[str] = []
        for f in POLICY_DEFINITION.fields:
            new = news.get(f.name)
            # A value that isn't known yet may differ from anything stored.
            if new != rpc.UNKNOWN and _field_equal(f, olds.get(f.name), new):
                continue
            changed.append(f.name)
            if f.immutable:
                replaces.append(f.name)

        # The name is the remote identity, so a replacement must remove the old definition
        # before writing the new one.
        return DiffResult(
            changes=len(changed) > 0,
            replaces=replaces,
            stables=[f.name for f in POLICY_DEFINITION.immutable_fields() if f.name not in replaces],
            delete_before_replace=True)

    def create(self, props: Any) -> CreateResult:
        observed = self._reconciler().create_or_update(PolicyDefinitionState.from_props(props))
        return CreateResult(observed.id, observed.to_props())

    def read(self, id_: str, props: Any) -> ReadResult:
        prior = PolicyDefinitionState.from_props(props, id_) if props else None
        observed = self._reconciler().read(id_, prior)
        if observed is None:
            # An empty ID tells the engine the resource is gone.
            return ReadResult("", {})
        return ReadResult(observed.id, observed.to_props())

    def update(self, id_: str, _olds: Any, news: Any) -> UpdateResult:
        observed = self._reconciler().create_or_update(PolicyDefinitionState.from_props(news, id_))
        return UpdateResult(observed.to_props())

    def delete(self, id_: str, _props: Any) -> None:
        self._reconciler().delete(id_)

    def _reconciler(self) -> PolicyDefinitionReconciler:
        settings = self.settings if self.settings is not None else ReconcilerSettings.from_config()
        return PolicyDefinitionReconciler(self.client, settings)


def _field_equal(f: Field, old: Optional[str], new: Optional[str]) -> bool:
    if f.kind == FieldKind.JSON:
        return json_equal(old, new)
    if f.kind == FieldKind.ENUM:
        return (old or "").lower() == (new or "").lower()
    return (old or "") == (new or "")


class PolicyDefinition(Resource):
    """
    A policy definition managed by `PolicyDefinitionProvider`.
    """

    name: pulumi.Output[str]
    policy_type: pulumi.Output[str]
    mode: pulumi.Output[str]
    display_name: pulumi.Output[str]
    description: pulumi.Output[Optional[str]]
    policy_rule: pulumi.Output[Optional[str]]
    metadata: pulumi.Output[Optional[str]]
    parameters: pulumi.Output[Optional[str]]

    def __init__(self,
                 resource_name: str,
                 provider: PolicyDefinitionProvider,
                 props: Mapping[str, pulumi.Input[Any]],
                 opts: Optional[pulumi.ResourceOptions] = None) -> None:
        """
        :param str resource_name: The Pulumi name of the resource.
        :param PolicyDefinitionProvider provider: The provider managing the definition.
        :param Mapping[str, pulumi.Input[Any]] props: The definition's fields, keyed by field
               name. `policy_rule`, `metadata` and `parameters` are JSON text.
        :param Optional[pulumi.ResourceOptions] opts: Options for the resource.
        """
        # Every field is passed so that all of them are exported as outputs.
        all_props = {f.name: props.get(f.name) for f in POLICY_DEFINITION.fields}
        super().__init__(provider, resource_name, all_props, opts)
