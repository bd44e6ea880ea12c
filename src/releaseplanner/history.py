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

"""Release boundary detection over a fetched commit window."""

from __future__ import annotations

from collections.abc import Sequence

from releaseplanner._types import RawCommit
from releaseplanner.errors import BoundaryNotFoundError

__all__ = [
    'walk_history',
]


def walk_history(
    commits: Sequence[RawCommit],
    boundary_sha: str | None,
    *,
    tag: str = '',
) -> tuple[RawCommit, ...]:
    """Return the commits strictly newer than the boundary commit.

    Args:
        commits: Commits of the target branch, newest first.
        boundary_sha: SHA of the previous release tag's commit, or
            ``None`` for an initial release (every commit is eligible).
        tag: Tag name, used in the error message only.

    Raises:
        BoundaryNotFoundError: *boundary_sha* is not in *commits*.  The
            window was too short or the tag is not on this branch;
            returning everything would re-release old commits.
    """
    if boundary_sha is None:
        return tuple(commits)
    for index, commit in enumerate(commits):
        if commit.sha == boundary_sha:
            return tuple(commits[:index])
    raise BoundaryNotFoundError(tag or boundary_sha, boundary_sha)
