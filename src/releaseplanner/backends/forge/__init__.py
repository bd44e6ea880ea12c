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

"""Forge protocol: the hosting platform seen by releaseplanner.

A forge hands out already-decoded values (see
:mod:`releaseplanner._types`).  Not-found is a value (``None``), not an
error.  Transport and HTTP failures raise
:class:`~releaseplanner.errors.ForgeAPIError` and are never retried.

Only the read methods are used while planning.  The write methods are
for the caller that publishes an accepted plan.

Implementations:

- :class:`~releaseplanner.backends.forge.gitea.GiteaClient`
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from releaseplanner._types import FileContent, PullRequestRef, RawCommit, ReleaseRef, RepositoryInfo, TagRef

__all__ = [
    'Forge',
]


@runtime_checkable
class Forge(Protocol):
    """Async client for a code hosting platform."""

    async def get_repository(self) -> RepositoryInfo:
        """Return repository metadata, including the default branch."""
        ...

    async def list_tags(self, limit: int) -> list[TagRef]:
        """Return up to *limit* tags, newest first."""
        ...

    async def list_commits(self, branch: str, limit: int) -> list[RawCommit]:
        """Return up to *limit* commits of *branch*, newest first."""
        ...

    async def get_file_content(self, path: str, ref: str) -> FileContent | None:
        """Return *path* at *ref*, or ``None`` if it does not exist."""
        ...

    async def create_or_update_file(
        self,
        path: str,
        content: str,
        message: str,
        *,
        revision: str | None = None,
        branch: str | None = None,
        new_branch: str | None = None,
    ) -> str:
        """Write *path*; update in place when *revision* is given.

        Returns:
            The new revision marker of the file.
        """
        ...

    async def create_pull_request(self, title: str, body: str, head: str, base: str) -> PullRequestRef:
        """Open a pull request from *head* into *base*."""
        ...

    async def create_tag(self, name: str, target: str, *, message: str | None = None) -> TagRef:
        """Create tag *name* at commit or branch *target*."""
        ...

    async def create_release(
        self,
        tag_name: str,
        name: str,
        *,
        body: str = '',
        target: str | None = None,
        draft: bool = False,
        prerelease: bool = False,
    ) -> ReleaseRef:
        """Publish a release for *tag_name*, creating the tag at *target* if needed."""
        ...
