# Copyright 2026 Firefly Software Solutions Inc.
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
"""Filter ordering — @order decorator and precedence constants."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

T = TypeVar("T", bound=type)

HIGHEST_PRECEDENCE: int = -(2**31)
LOWEST_PRECEDENCE: int = 2**31 - 1

# Ahead of anything that may reject or short-circuit a request, so
# preflights are answered before authentication-style filters run.
CORS_FILTER_ORDER: int = HIGHEST_PRECEDENCE + 50


def order(value: int) -> Callable[[T], T]:
    """Set the position of a filter class in the chain (lower runs first)."""

    def decorator(cls: T) -> T:
        cls.__corsgate_order__ = value  # type: ignore[attr-defined]
        return cls

    return decorator


def get_order(cls: type) -> int:
    """Order value for *cls*; undecorated classes sort at 0."""
    return getattr(cls, "__corsgate_order__", 0)
