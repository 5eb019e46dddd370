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

import pulumi
from pulumi.dynamic import ConfigureRequest
from pulumi.dynamic.config import Config
from pulumi_policy_definition.config import ReconcilerSettings

class _StaticConfig:
    def __init__(self, values):
        self.values = values

    def get_float(self, key):
        return float(self.values[key]) if key in self.values else None

    def get_int(self, key):
        return int(self.values[key]) if key in self.values else None

class ReconcilerSettingsTests(unittest.TestCase):
    def test_defaults(self):
        settings = ReconcilerSettings()
        self.assertEqual(300, settings.propagation_timeout)
        self.assertEqual(10, settings.poll_interval)
        self.assertEqual(10, settings.continuous_target_occurrence)

    def test_init_raises(self):
        self.assertRaises(TypeError, lambda: ReconcilerSettings(None))
        self.assertRaises(TypeError, lambda: ReconcilerSettings("300"))
        self.assertRaises(TypeError, lambda: ReconcilerSettings(0))
        self.assertRaises(TypeError, lambda: ReconcilerSettings(True))
        self.assertRaises(TypeError, lambda: ReconcilerSettings(300, -1))
        self.assertRaises(TypeError, lambda: ReconcilerSettings(300, "10"))
        self.assertRaises(TypeError, lambda: ReconcilerSettings(300, 10, 0))
        self.assertRaises(TypeError, lambda: ReconcilerSettings(300, 10, 1.5))

    def test_from_config(self):
        test_cases = [
            {
                "config": {},
                "expected": (300, 10, 10),
            },
            {
                "config": {"pollIntervalSeconds": "5"},
                "expected": (300, 5, 10),
            },
            {
                "config": {"propagationTimeoutSeconds": "600", "continuousTargetOccurrence": "3"},
                "expected": (600, 10, 3),
            },
        ]

        for test_case in test_cases:
            settings = ReconcilerSettings.from_config(_StaticConfig(test_case["config"]))
            self.assertEqual(test_case["expected"], (settings.propagation_timeout,
                                                     settings.poll_interval,
                                                     settings.continuous_target_occurrence))

    def test_from_stack_config(self):
        pulumi.runtime.set_config("policy-definition-test:pollIntervalSeconds", "2.5")
        pulumi.runtime.set_config("policy-definition-test:continuousTargetOccurrence", "4")
        settings = ReconcilerSettings.from_config(pulumi.Config("policy-definition-test"))
        self.assertEqual(2.5, settings.poll_interval)
        self.assertEqual(4, settings.continuous_target_occurrence)
        self.assertEqual(300, settings.propagation_timeout)

    def test_from_configure_request(self):
        req = ConfigureRequest(Config({
            "policy-definition:propagationTimeoutSeconds": "60",
            "policy-definition:pollIntervalSeconds": "1",
            "other:pollIntervalSeconds": "99",
        }, "proj"))
        settings = ReconcilerSettings.from_configure_request(req)
        self.assertEqual((60, 1, 10), (settings.propagation_timeout,
                                       settings.poll_interval,
                                       settings.continuous_target_occurrence))

        settings = ReconcilerSettings.from_configure_request(ConfigureRequest(Config({}, "proj")))
        self.assertEqual(10, settings.poll_interval)

    def test_from_configure_request_raises(self):
        req = ConfigureRequest(Config({"policy-definition:continuousTargetOccurrence": "many"}, "proj"))
        self.assertRaises(TypeError, lambda: ReconcilerSettings.from_configure_request(req))
