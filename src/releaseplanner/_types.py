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

"""Shared leaf-level types used across releaseplanner.

These are the already-decoded shapes handed over by a forge backend.
This module must have **zero** imports from other ``releaseplanner``
subpackages to avoid circular-import chains.  It is safe to import
from any module in the project.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    'FileContent',
    'PullRequestRef',
    'ReleaseRef',
    'RawCommit',
    'RepositoryInfo',
    'TagRef',
]


@dataclass(frozen=True)
class RawCommit:
    """A commit as listed by the forge, before classification.

    Attributes:
        sha: The full commit SHA. Unique within one fetched batch.
        message: The full commit message (subject, body and footers).
        parents: Parent commit SHAs, in the order the forge reports them.
    """

    sha: str
    message: str
    parents: tuple[str, ...] = ()


@dataclass(frozen=True)
class TagRef:
    """A tag name and the commit it points at.

    ``commit_sha`` is ``None`` when the forge payload did not say which
    commit the tag targets.
    """

    name: str
    commit_sha: str | None = None


@dataclass(frozen=True)
class FileContent:
    """Decoded content of a remote file plus its revision marker.

    Attributes:
        content: UTF-8 text of the file.
        revision: Opaque token for the file state (the blob SHA on
            Gitea/GitHub).  Writes that carry it update in place and
            fail if the file changed in the meantime.
    """

    content: str
    revision: str


@dataclass(frozen=True)
class RepositoryInfo:
    """Repository metadata needed to plan a release."""

    owner: str
    repo: str
    default_branch: str = 'main'
    html_url: str = ''


@dataclass(frozen=True)
class PullRequestRef:
    """Number and web URL of a pull request created on the forge."""

    number: int
    url: str


@dataclass(frozen=True)
class ReleaseRef:
    """A published release on the forge."""

    id: int
    tag_name: str
    url: str
