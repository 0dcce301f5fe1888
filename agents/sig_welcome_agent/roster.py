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
from dataclasses import field

from sig_welcome_agent.relations import identity_of
from sig_welcome_agent.relations import list_field
from sig_welcome_agent.relations import load_document


@dataclass(frozen=True)
class SigRoster:
    maintainers: frozenset[str] = field(default_factory=frozenset)
    committers: frozenset[str] = field(default_factory=frozenset)


def _role(data, key: str) -> frozenset[str]:
    members = set()
    for entry in list_field(data, key, "sig-info file"):
        identity = identity_of(entry)
        if identity:
            members.add(identity)
    return frozenset(members)


def parse_sig_info(raw: bytes) -> SigRoster:
    """Parse a `sig-info.yaml` file into its maintainers and committers.

    A missing role list gives an empty set for that role. Malformed YAML
    raises ParseError.
    """
    data = load_document(raw, "sig-info file")
    return SigRoster(
        maintainers=_role(data, "maintainers"),
        committers=_role(data, "committers"),
    )
