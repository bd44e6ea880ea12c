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

"""Capture of the repository state a release plan is computed from.

All forge reads happen here, once, before planning starts.  The
planner never goes back to the forge, so a plan is a function of the
:class:`RepositorySnapshot` alone.
"""

from __future__ import annotations

import asyncio
import datetime
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from releaseplanner._types import FileContent, RawCommit, RepositoryInfo, TagRef

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

    from releaseplanner.backends.forge import Forge
    from releaseplanner.plan import ReleasePlanOptions

__all__ = [
    'DEFAULT_COMMIT_LIMIT',
    'DEFAULT_TAG_LIMIT',
    'RepositorySnapshot',
    'capture_snapshot',
]

DEFAULT_TAG_LIMIT = 1
DEFAULT_COMMIT_LIMIT = 100


@dataclass(frozen=True)
class RepositorySnapshot:
    """One logical snapshot of the repository.

    Attributes:
        repository: Repository metadata.
        target_branch: The branch being released.
        tags: Tags, newest first.
        commits: Commits of the target branch, newest first.
        files: Current state of every planned path; ``None`` for
            files that do not exist.
        release_date: Date used in the changelog heading.
    """

    repository: RepositoryInfo
    target_branch: str
    tags: tuple[TagRef, ...]
    commits: tuple[RawCommit, ...]
    files: Mapping[str, FileContent | None] = field(default_factory=dict)
    release_date: datetime.date = field(default_factory=datetime.date.today)


async def capture_snapshot(
    forge: Forge,
    options: ReleasePlanOptions,
    *,
    today: datetime.date | None = None,
    tag_limit: int = DEFAULT_TAG_LIMIT,
    commit_limit: int = DEFAULT_COMMIT_LIMIT,
    log: BoundLogger | None = None,
) -> RepositorySnapshot:
    """Read everything a release plan needs from *forge*.

    Tags, commits and file contents are fetched concurrently.  Forge
    errors propagate unchanged.

    Args:
        forge: The hosting platform client.
        options: Determines the target branch and the files to read.
        today: Release date; the current local date when ``None``.
        tag_limit: How many of the newest tags to fetch.
        commit_limit: How many of the newest commits to fetch.
        log: Optional logger.
    """
    repository = await forge.get_repository()
    branch = options.target_branch or repository.default_branch
    paths = options.file_paths

    tags, commits, *contents = await asyncio.gather(
        forge.list_tags(tag_limit),
        forge.list_commits(branch, commit_limit),
        *(forge.get_file_content(path, branch) for path in paths),
    )
    if log is not None:
        log.debug(
            'snapshot_captured',
            branch=branch,
            tags=len(tags),
            commits=len(commits),
            missing=[path for path, content in zip(paths, contents) if content is None],
        )
    return RepositorySnapshot(
        repository=repository,
        target_branch=branch,
        tags=tuple(tags),
        commits=tuple(commits),
        files=dict(zip(paths, contents)),
        release_date=today or datetime.date.today(),
    )
