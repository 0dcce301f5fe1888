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

import argparse
import logging
import sys
import time

from sig_welcome_agent.bot import ISSUE
from sig_welcome_agent.bot import PULL_REQUEST
from sig_welcome_agent.bot import WelcomeBot
from sig_welcome_agent.bot import WelcomeEvent
from sig_welcome_agent.config import load_bot_config
from sig_welcome_agent.errors import WelcomeError
from sig_welcome_agent.github import GitHubClient
from sig_welcome_agent.settings import AUTHOR
from sig_welcome_agent.settings import BOT_CONFIG_PATH
from sig_welcome_agent.settings import EVENT_ACTION
from sig_welcome_agent.settings import EVENT_NAME
from sig_welcome_agent.settings import ISSUE_NUMBER
from sig_welcome_agent.settings import LOG_LEVEL
from sig_welcome_agent.settings import OWNER
from sig_welcome_agent.settings import PR_NUMBER
from sig_welcome_agent.settings import REPO
from sig_welcome_agent.utils import parse_number_string
import yaml


def process_arguments(argv=None):
    """Parses command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Welcomes the author of a new issue or pull request.",
        epilog=(
            "Example usage: \n"
            "\tpython -m sig_welcome_agent.main --pr_number 21 --author alice\n"
            "\tpython -m sig_welcome_agent.main --issue_number 7 --author bob\n"
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )

    group = parser.add_mutually_exclusive_group()
    group.add_argument("--pr_number", type=str, metavar="NUM", help="Welcome a pull request.")
    group.add_argument("--issue_number", type=str, metavar="NUM", help="Welcome an issue.")
    parser.add_argument("--author", type=str, help="Login of the event author.")
    parser.add_argument("--config", type=str, help="Path to the bot config YAML file.")

    return parser.parse_args(argv)


def build_event(args) -> WelcomeEvent | None:
    """Builds the event from the arguments, falling back to the environment."""
    if args.pr_number or (not args.issue_number and EVENT_NAME == PULL_REQUEST):
        kind, raw_number = PULL_REQUEST, args.pr_number or PR_NUMBER
    else:
        kind, raw_number = ISSUE, args.issue_number or ISSUE_NUMBER

    number = parse_number_string(raw_number)
    if not number:
        print(f"Error: Invalid {kind} number received: {raw_number}.", file=sys.stderr)
        return None

    author = args.author or AUTHOR
    if not OWNER or not REPO or not author:
        print("Error: OWNER, REPO and AUTHOR must be set.", file=sys.stderr)
        return None

    return WelcomeEvent(
        kind=kind,
        org=OWNER,
        repo=REPO,
        number=number,
        author=author,
        action=EVENT_ACTION,
    )


def main(argv=None) -> int:
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    args = process_arguments(argv)
    event = build_event(args)
    if event is None:
        return 1

    print(f"EVENT: Welcoming {event.kind} #{event.number} by {event.author}.")
    config_path = args.config or BOT_CONFIG_PATH
    try:
        cfg = load_bot_config(config_path, event.org, event.repo)
    except (yaml.YAMLError, OSError, ValueError) as e:
        logging.getLogger(__name__).error("Cannot load bot config %s: %s", config_path, e)
        return 1
    bot = WelcomeBot(GitHubClient(), cfg)
    try:
        result = bot.handle(event)
    except WelcomeError as e:
        logging.getLogger(__name__).error(
            "Welcome failed for %s/%s#%d: %s", event.org, event.repo, event.number, e
        )
        return 1

    print(f"<<<< Result: {result.get('status')} {result.get('label', '')}\n")
    return 0


if __name__ == "__main__":
    start_time = time.time()
    print(
        f"Start welcoming on {OWNER}/{REPO} at"
        f" {time.strftime('%Y-%m-%d %H:%M:%S', time.gmtime(start_time))}"
    )
    print("-" * 80)
    exit_code = main()
    print("-" * 80)
    end_time = time.time()
    print(
        "Welcoming finished at"
        f" {time.strftime('%Y-%m-%d %H:%M:%S', time.gmtime(end_time))}",
    )
    print("Total script execution time:", f"{end_time - start_time:.2f} seconds")
    sys.exit(exit_code)
