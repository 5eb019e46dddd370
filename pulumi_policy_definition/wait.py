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
import time
from typing import Any, Callable, List, Optional, Tuple

import pulumi

from .errors import OperationCancelled, PropagationTimeout, UnexpectedState

RefreshFunc = Callable[[], Tuple[Any, str]]
"""
RefreshFunc is the callback signature used to observe the remote object. It returns the observed
object (or None) and a status string that is matched against the pending and target statuses.
Errors raised by the callback abort the wait.
"""


class Clock:
    """
    The time source used while waiting. Tests substitute a simulated clock.
    """

    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float, cancel: Optional[threading.Event] = None) -> bool:
        """
        Blocks for `seconds`, returning early if `cancel` is set. Returns True if the wait was
        cancelled.
        """
        if cancel is None:
            time.sleep(seconds)
            return False
        return cancel.wait(seconds)


def wait_for_state(name: str,
                   refresh: RefreshFunc,
                   pending: List[str],
                   target: List[str],
                   timeout: float,
                   poll_interval: float,
                   continuous_target_occurrence: int,
                   clock: Optional[Clock] = None,
                   cancel: Optional[threading.Event] = None) -> Any:
    """
    Polls `refresh` every `poll_interval` seconds until it reports a target status on
    `continuous_target_occurrence` consecutive polls, and returns the last observed object.
    A pending status resets the count. Raises `PropagationTimeout` once more than `timeout`
    seconds have elapsed, `OperationCancelled` as soon as `cancel` is set, and
    `UnexpectedState` for a status that is neither pending nor a target.
    """
    clock = clock if clock is not None else Clock()
    start = clock.now()
    target_occurrence = 0
    last_status: Optional[str] = None

    while True:
        if cancel is not None and cancel.is_set():
            raise OperationCancelled(name)

        result, status = refresh()
        if status != last_status:
            pulumi.log.debug(f"Policy Definition {name!r} is now in state '{status}'")
            last_status = status

        if status in target:
            target_occurrence += 1
            if target_occurrence >= continuous_target_occurrence:
                return result
        elif status in pending:
            target_occurrence = 0
        else:
            raise UnexpectedState(name, status)

        if clock.sleep(poll_interval, cancel):
            raise OperationCancelled(name)
        if clock.now() - start > timeout:
            raise PropagationTimeout(name, timeout)
