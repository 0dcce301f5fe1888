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
from typing import Any

from sig_welcome_agent.errors import ParseError
import yaml

# Owner entries are keyed by the account name on the hosting platform.
IDENTITY_KEYS = ("gitee_id", "github_id")


@dataclass(frozen=True)
class OwnershipRule:
    paths: tuple[str, ...]
    owners: tuple[str, ...]


@dataclass(frozen=True)
class RelationDocument:
    rules: tuple[OwnershipRule, ...] = field(default_factory=tuple)


def load_document(raw: bytes, kind: str) -> dict[str, Any]:
    """Load a YAML mapping, treating empty input as an empty mapping."""
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ParseError(f"malformed {kind}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ParseError(
            f"malformed {kind}: expected a mapping, got {type(data).__name__}"
        )
    return data


def list_field(data: dict[str, Any], key: str, kind: str) -> list[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ParseError(
            f"malformed {kind}: '{key}' must be a list, got {type(value).__name__}"
        )
    return value


def identity_of(entry: Any) -> str | None:
    """Return the account name of an owner entry, if it carries one."""
    if isinstance(entry, str):
        return entry or None
    if isinstance(entry, dict):
        for key in IDENTITY_KEYS:
            value = entry.get(key)
            if value:
                return str(value)
    return None


def parse_relations(raw: bytes) -> RelationDocument:
    """Parse the ownership relation document.

    The document lists path patterns together with the people owning the
    files under them:

      relations:
        - path: [docs/*/README]
          owner:
            - gitee_id: alice

    Args:
      raw: decoded bytes of the relation file.

    Returns:
      The parsed document. Empty input gives a document without rules.

    Raises:
      ParseError: the bytes are not valid YAML or do not have the shape above.
    """
    kind = "relation document"
    data = load_document(raw, kind)

    rules = []
    for entry in list_field(data, "relations", kind):
        if not isinstance(entry, dict):
            raise ParseError(f"malformed {kind}: relation entries must be mappings")
        paths = tuple(str(p) for p in list_field(entry, "path", kind) if p)
        owners = []
        for owner in list_field(entry, "owner", kind):
            identity = identity_of(owner)
            if identity:
                owners.append(identity)
        rules.append(OwnershipRule(paths=paths, owners=tuple(owners)))

    return RelationDocument(rules=tuple(rules))
