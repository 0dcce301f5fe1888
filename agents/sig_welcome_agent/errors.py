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


class WelcomeError(Exception):
    """Base class for every error raised by the welcome agent."""


class FetchError(WelcomeError):
    """Retrieving content from the hosting API failed."""


class DecodeError(WelcomeError):
    """Transport-encoded file content could not be decoded."""


class ParseError(WelcomeError):
    """A relation or roster document is malformed."""


class ResolutionError(WelcomeError):
    """No SIG or no owner set could be determined for a repository."""


class MultipleErrors(WelcomeError):
    """Several independent steps of one event failed."""

    def __init__(self, errors: list[Exception]):
        self.errors = list(errors)
        super().__init__("; ".join(str(e) for e in self.errors))


def raise_if_any(errors: list[Exception]) -> None:
    if not errors:
        return
    if len(errors) == 1:
        raise errors[0]
    raise MultipleErrors(errors)
