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

from typing import Any

from sig_welcome_agent.settings import GITHUB_TOKEN
import requests
from tenacity import retry
from tenacity import retry_if_exception
from tenacity import stop_after_attempt
from tenacity import wait_fixed

headers = {
    "Authorization": f"token {GITHUB_TOKEN}",
    "Accept": "application/vnd.github.v3+json",
}

PER_PAGE = 100


def is_retryable(exc: BaseException) -> bool:
    """Client errors (4xx) are final; everything else is worth another try."""
    if not isinstance(exc, requests.exceptions.RequestException):
        return False
    response = getattr(exc, "response", None)
    if response is not None and 400 <= response.status_code < 500:
        return response.status_code == 429
    return True


@retry(
    retry=retry_if_exception(is_retryable),
    stop=stop_after_attempt(3),
    wait=wait_fixed(2),
    reraise=True,
)
def get_request(url: str, params: dict[str, Any] | None = None) -> Any:
    if params is None:
        params = {}
    response = requests.get(url, headers=headers, params=params, timeout=60)
    response.raise_for_status()
    return response.json()


@retry(
    retry=retry_if_exception(is_retryable),
    stop=stop_after_attempt(3),
    wait=wait_fixed(2),
    reraise=True,
)
def post_request(url: str, payload: Any) -> Any:
    response = requests.post(url, headers=headers, json=payload, timeout=60)
    response.raise_for_status()
    return response.json()


def get_all_pages(url: str, params: dict[str, Any] | None = None) -> list[Any]:
    """Collect every item of a paginated list endpoint."""
    items = []
    page = 1
    while True:
        page_params = dict(params or {}, per_page=PER_PAGE, page=page)
        batch = get_request(url, page_params)
        items.extend(batch)
        if len(batch) < PER_PAGE:
            return items
        page += 1


def is_not_found(exc: requests.exceptions.RequestException) -> bool:
    response = getattr(exc, "response", None)
    return response is not None and response.status_code == 404


def parse_number_string(number_str: str | None, default_value: int = 0) -> int:
    """Parse a number from the given string."""
    if number_str is None:
        return default_value
    try:
        return int(number_str)
    except ValueError:
        print(
            f"Warning: Invalid number string: {number_str}. Defaulting to"
            f" {default_value}."
        )
        return default_value
