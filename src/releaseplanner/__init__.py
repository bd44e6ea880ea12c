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
#
# SPDX-License-Identifier: Apache-2.0

"""Release pull request planning from Conventional Commits history.

Usage::

    from releaseplanner import build_release_plan, capture_snapshot, load_config
    from releaseplanner.backends.forge.gitea import GiteaClient, normalize_api_base_url
    from releaseplanner.logging import configure_logging, get_logger

    configure_logging()
    options = load_config(Path('pyproject.toml'))
    async with GiteaClient(owner='octo', repo='demo', token=token,
                           base_url=normalize_api_base_url(server)) as forge:
        snapshot = await capture_snapshot(forge, options)
    outcome = build_release_plan(snapshot, options, log=get_logger())
"""

from releaseplanner.config import load_config, parse_config
from releaseplanner.plan import (
    NothingToRelease,
    PlanOutcome,
    Planned,
    ReleasePlan,
    ReleasePlanOptions,
    build_release_plan,
)
from releaseplanner.snapshot import RepositorySnapshot, capture_snapshot

__version__ = '0.1.0'

__all__ = [
    'NothingToRelease',
    'PlanOutcome',
    'Planned',
    'ReleasePlan',
    'ReleasePlanOptions',
    'RepositorySnapshot',
    'build_release_plan',
    'capture_snapshot',
    'load_config',
    'parse_config',
]
