# Copyright 2026 TIER IV, inc.
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


"""JSON pointer helpers (RFC 6901) for addressing values inside documents."""

from typing import Iterable, Union


def escape_token(token: Union[str, int]) -> str:
    # "~" must be escaped first so that "~1" produced for "/" is not re-escaped.
    return str(token).replace("~", "~0").replace("/", "~1")


def join_path(segments: Iterable[Union[str, int]]) -> str:
    """Render path segments as a JSON pointer; the empty path renders as ``""``."""
    return "".join(f"/{escape_token(seg)}" for seg in segments)


def child_pointer(base: str, token: Union[str, int]) -> str:
    return f"{base}/{escape_token(token)}"
