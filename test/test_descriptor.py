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

import unittest

from pulumi.runtime import rpc
from pulumi_policy_definition.client import PolicyDefinition
from pulumi_policy_definition.descriptor import (
    POLICY_DEFINITION,
    Field,
    FieldKind,
    PolicyDefinitionState,
    ResourceDescriptor,
    from_definition,
    to_definition,
)
from pulumi_policy_definition.errors import InvalidFieldValue, InvalidJsonField

def valid_props(**overrides):
    props = {
        "name": "audit-vms",
        "policy_type": "Custom",
        "mode": "All",
        "display_name": "Audit VMs",
    }
    props.update(overrides)
    return props

class FieldTests(unittest.TestCase):
    def test_init_raises(self):
        self.assertRaises(TypeError, lambda: Field(None, FieldKind.STRING))
        self.assertRaises(TypeError, lambda: Field("", FieldKind.STRING))
        self.assertRaises(TypeError, lambda: Field(1, FieldKind.STRING))
        self.assertRaises(TypeError, lambda: Field("f", "string"))
        self.assertRaises(TypeError, lambda: Field("f", FieldKind.ENUM))
        self.assertRaises(TypeError, lambda: Field("f", FieldKind.ENUM, allowed_values=[]))
        self.assertRaises(TypeError, lambda: Field("f", FieldKind.ENUM, allowed_values=[1]))
        self.assertRaises(TypeError, lambda: Field("f", FieldKind.JSON, allowed_values=["a"]))

    def test_normalize(self):
        f = Field("f", FieldKind.ENUM, allowed_values=["BuiltIn", "Custom"])
        self.assertEqual("BuiltIn", f.normalize("builtin"))
        self.assertEqual("Custom", f.normalize("CUSTOM"))
        self.assertIsNone(f.normalize("other"))

class ResourceDescriptorTests(unittest.TestCase):
    def test_init_raises(self):
        self.assertRaises(TypeError, lambda: ResourceDescriptor([]))
        self.assertRaises(TypeError, lambda: ResourceDescriptor([None]))
        self.assertRaises(TypeError, lambda: ResourceDescriptor(
            [Field("a", FieldKind.STRING), Field("a", FieldKind.JSON)]))

    def test_policy_definition_schema(self):
        self.assertEqual(["name", "policy_type", "mode"],
                         [f.name for f in POLICY_DEFINITION.immutable_fields()])
        self.assertEqual(FieldKind.JSON, POLICY_DEFINITION["policy_rule"].kind)
        self.assertTrue(POLICY_DEFINITION["display_name"].required)
        self.assertFalse(POLICY_DEFINITION["description"].required)

    def test_validate_valid(self):
        inputs, failures = POLICY_DEFINITION.validate(valid_props(policy_rule='{"if": {}}', extra=1))
        self.assertEqual([], failures)
        self.assertEqual(1, inputs["extra"])

    def test_validate_normalizes_enums_case_insensitively(self):
        for spelling in ["custom", "CUSTOM", "Custom", "cUsToM"]:
            inputs, failures = POLICY_DEFINITION.validate(valid_props(policy_type=spelling, mode="indexed"))
            self.assertEqual([], failures)
            self.assertEqual("Custom", inputs["policy_type"])
            self.assertEqual("Indexed", inputs["mode"])

        inputs, _ = POLICY_DEFINITION.validate(valid_props(policy_type="builtin", mode="notspecified"))
        self.assertEqual("BuiltIn", inputs["policy_type"])
        self.assertEqual("NotSpecified", inputs["mode"])

    def test_validate_failures(self):
        _, failures = POLICY_DEFINITION.validate({})
        self.assertEqual(["name", "policy_type", "mode", "display_name"], [f.field for f in failures])
        for f in failures:
            self.assertIsInstance(f.error, InvalidFieldValue)

        _, failures = POLICY_DEFINITION.validate(valid_props(mode="Sometimes"))
        self.assertEqual(["mode"], [f.field for f in failures])
        self.assertIn("Sometimes", failures[0].error.message)

        _, failures = POLICY_DEFINITION.validate(valid_props(description=1))
        self.assertEqual(["description"], [f.field for f in failures])

        _, failures = POLICY_DEFINITION.validate(valid_props(parameters="{oops"))
        self.assertEqual(["parameters"], [f.field for f in failures])
        self.assertIsInstance(failures[0].error, InvalidJsonField)
        self.assertEqual("parameters", failures[0].error.field)

    def test_validate_empty_json_is_skipped(self):
        _, failures = POLICY_DEFINITION.validate(valid_props(policy_rule="", metadata=None))
        self.assertEqual([], failures)

    def test_validate_skips_unknown_values(self):
        inputs, failures = POLICY_DEFINITION.validate(
            valid_props(display_name=rpc.UNKNOWN, mode=rpc.UNKNOWN, policy_rule=rpc.UNKNOWN))
        self.assertEqual([], failures)
        self.assertEqual(rpc.UNKNOWN, inputs["mode"])

class MappingTests(unittest.TestCase):
    def test_props_round_trip(self):
        state = PolicyDefinitionState.from_props(valid_props(metadata='{"a":1}'), "id")
        self.assertEqual("id", state.id)
        self.assertEqual("Audit VMs", state.display_name)
        props = state.to_props()
        self.assertEqual('{"a":1}', props["metadata"])
        self.assertIsNone(props["parameters"])
        self.assertNotIn("id", props)

    def test_to_definition(self):
        state = PolicyDefinitionState.from_props(valid_props(policy_rule='{"if": {"field": "type"}}', metadata=""))
        definition = to_definition(state)
        self.assertEqual("audit-vms", definition.name)
        self.assertEqual({"if": {"field": "type"}}, definition.policy_rule)
        self.assertIsNone(definition.metadata)
        self.assertIsNone(definition.parameters)
        self.assertIsNone(definition.id)

    def test_to_definition_sends_unset_description_as_empty(self):
        definition = to_definition(PolicyDefinitionState.from_props(valid_props()))
        self.assertEqual("", definition.description)

        definition = to_definition(PolicyDefinitionState.from_props(valid_props(description="Audits VMs")))
        self.assertEqual("Audits VMs", definition.description)

    def test_to_definition_raises_on_invalid_json(self):
        state = PolicyDefinitionState.from_props(valid_props(parameters="[1,"))
        with self.assertRaises(InvalidJsonField) as cm:
            to_definition(state)
        self.assertEqual("parameters", cm.exception.field)

    def test_from_definition(self):
        definition = PolicyDefinition("audit-vms", "Custom", "All", "Audit VMs", None,
                                      policy_rule={"then": {"effect": "audit"}, "if": {}},
                                      id="/x/y")
        state = from_definition(definition)
        self.assertEqual("/x/y", state.id)
        self.assertEqual('{"if":{},"then":{"effect":"audit"}}', state.policy_rule)
        self.assertIsNone(state.metadata)
        self.assertIsNone(state.description)

    def test_from_definition_keeps_prior_value_for_null_json(self):
        prior = PolicyDefinitionState.from_props(valid_props(metadata='{"owner": "me"}', parameters=""))
        definition = PolicyDefinition("audit-vms", "Custom", "All", "Audit VMs", parameters={"p": {}})
        state = from_definition(definition, prior)
        self.assertEqual('{"owner": "me"}', state.metadata)
        self.assertEqual('{"p":{}}', state.parameters)
        self.assertIsNone(state.policy_rule)
