# Copyright 2026 Google LLC
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

import re

from sig_welcome_agent.errors import ParseError

WILDCARD_SEGMENT = "/*/"
ANY_SEGMENT = r"/[^\s]+/"


def matches(changed_path: str, pattern: str) -> bool:
    """Check whether a changed file falls under an ownership pattern.

    Patterns match anywhere inside the path, not only as a prefix. A `/*/`
    segment stands for one or more non-whitespace characters between two
    slashes.

    Args:
      changed_path: path of a file touched by the pull request.
      pattern: a path pattern taken from the relation document.

    Returns:
      True when the pattern covers the changed path.

    Raises:
      ParseError: the pattern is not a valid regular expression once the
        wildcard segment is expanded.
    """
    if pattern in changed_path:
        return True
    if WILDCARD_SEGMENT not in pattern:
        return False

    expression = pattern.replace(WILDCARD_SEGMENT, ANY_SEGMENT)
    try:
        compiled = re.compile(expression)
    except re.error as e:
        raise ParseError(f"invalid path pattern {pattern!r}: {e}") from e
    return compiled.search(changed_path) is not None
