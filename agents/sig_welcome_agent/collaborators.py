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

from dataclasses import dataclass
from typing import Iterable

# Access tiers of the hosting platform's permission model.
GUEST = 10
REPORTER = 20
DEVELOPER = 30
MAINTAINER = 40
OWNER = 50

MAINTAINER_ACCESS_LEVELS = frozenset({DEVELOPER, MAINTAINER, OWNER})

# GitHub reports collaborator permissions by name.
PERMISSION_ACCESS_LEVELS = {
    "pull": GUEST,
    "read": GUEST,
    "triage": REPORTER,
    "push": DEVELOPER,
    "write": DEVELOPER,
    "maintain": MAINTAINER,
    "admin": OWNER,
}


@dataclass(frozen=True)
class Collaborator:
    login: str
    access_level: int


def access_level_for(permissions: dict[str, bool] | None, role_name: str | None = None) -> int:
    """Map a GitHub collaborator payload onto the numeric access tiers.

    `role_name` wins when present. Otherwise the highest granted permission
    flag decides.
    """
    if role_name and role_name in PERMISSION_ACCESS_LEVELS:
        return PERMISSION_ACCESS_LEVELS[role_name]

    level = 0
    for name, granted in (permissions or {}).items():
        if granted:
            level = max(level, PERMISSION_ACCESS_LEVELS.get(name, 0))
    return level


def fallback_maintainers(collaborators: Iterable[Collaborator | None]) -> set[str]:
    """Collaborators with write access or above, used when no roster exists."""
    return {
        c.login
        for c in collaborators
        if c is not None and c.access_level in MAINTAINER_ACCESS_LEVELS
    }
