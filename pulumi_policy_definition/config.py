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

from typing import Callable, Optional, Union

import pulumi
from pulumi.dynamic import ConfigureRequest

CONFIG_NAMESPACE = "policy-definition"

_DEFAULT_PROPAGATION_TIMEOUT = 5 * 60

_DEFAULT_POLL_INTERVAL = 10

_DEFAULT_CONTINUOUS_TARGET_OCCURRENCE = 10


class ReconcilerSettings:
    """
    Controls how long the reconciler waits for writes to become visible.
    """

    propagation_timeout: float
    """
    The maximum number of seconds to wait for a write to become consistently visible.
    """

    poll_interval: float
    """
    The number of seconds between two reads while waiting.
    """

    continuous_target_occurrence: int
    """
    The number of consecutive reads that must observe the definition before it is considered
    available. Guards against reads served by a replica that hasn't caught up yet.
    """

    def __init__(self,
                 propagation_timeout: Union[int, float] = _DEFAULT_PROPAGATION_TIMEOUT,
                 poll_interval: Union[int, float] = _DEFAULT_POLL_INTERVAL,
                 continuous_target_occurrence: int = _DEFAULT_CONTINUOUS_TARGET_OCCURRENCE) -> None:
        """
        :param Union[int, float] propagation_timeout: The maximum number of seconds to wait for a
               write to become consistently visible.
        :param Union[int, float] poll_interval: The number of seconds between two reads.
        :param int continuous_target_occurrence: The number of consecutive successful reads required.
        """
        if isinstance(propagation_timeout, bool) or not isinstance(propagation_timeout, (int, float)):
            raise TypeError("Expected propagation_timeout to be a number")
        if propagation_timeout <= 0:
            raise TypeError("Expected propagation_timeout to be positive")
        if isinstance(poll_interval, bool) or not isinstance(poll_interval, (int, float)):
            raise TypeError("Expected poll_interval to be a number")
        if poll_interval <= 0:
            raise TypeError("Expected poll_interval to be positive")
        if isinstance(continuous_target_occurrence, bool) or not isinstance(continuous_target_occurrence, int):
            raise TypeError("Expected continuous_target_occurrence to be an int")
        if continuous_target_occurrence < 1:
            raise TypeError("Expected continuous_target_occurrence to be at least 1")
        self.propagation_timeout = propagation_timeout
        self.poll_interval = poll_interval
        self.continuous_target_occurrence = continuous_target_occurrence

    @staticmethod
    def from_config(config: Optional[pulumi.Config] = None) -> 'ReconcilerSettings':
        """
        Reads settings from the `policy-definition` configuration namespace of the current stack,
        e.g. `pulumi config set policy-definition:pollIntervalSeconds 5`. Unset keys keep their
        defaults.
        """
        if config is None:
            config = pulumi.Config(CONFIG_NAMESPACE)

        propagation_timeout = config.get_float("propagationTimeoutSeconds")
        poll_interval = config.get_float("pollIntervalSeconds")
        continuous_target_occurrence = config.get_int("continuousTargetOccurrence")

        return _with_defaults(propagation_timeout, poll_interval, continuous_target_occurrence)

    @staticmethod
    def from_configure_request(req: ConfigureRequest) -> 'ReconcilerSettings':
        """
        Reads settings from the stack configuration handed to a dynamic provider when the engine
        configures it. The provider host process has no other access to stack configuration.
        """
        def lookup(key: str) -> Optional[str]:
            return req.config.get(f"{CONFIG_NAMESPACE}:{key}")

        return _with_defaults(
            _parse("propagationTimeoutSeconds", lookup, float),
            _parse("pollIntervalSeconds", lookup, float),
            _parse("continuousTargetOccurrence", lookup, int))


def _parse(key: str,
           lookup: Callable[[str], Optional[str]],
           convert: Callable[[str], Union[int, float]]) -> Optional[Union[int, float]]:
    value = lookup(key)
    if not value:
        return None
    try:
        return convert(value)
    except ValueError as e:
        raise TypeError(f"Expected {CONFIG_NAMESPACE}:{key} to be a {convert.__name__}, got {value!r}") from e


def _with_defaults(propagation_timeout: Optional[Union[int, float]],
                   poll_interval: Optional[Union[int, float]],
                   continuous_target_occurrence: Optional[int]) -> ReconcilerSettings:
    return ReconcilerSettings(
        propagation_timeout if propagation_timeout is not None else _DEFAULT_PROPAGATION_TIMEOUT,
        poll_interval if poll_interval is not None else _DEFAULT_POLL_INTERVAL,
        (continuous_target_occurrence if continuous_target_occurrence is not None
         else _DEFAULT_CONTINUOUS_TARGET_OCCURRENCE))
