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

"""Exception hierarchy for releaseplanner.

Only genuine failures are exceptions.  Benign outcomes (a missing tag,
a missing file, nothing to release) are modelled as values instead;
see :mod:`releaseplanner.plan`.

Hierarchy::

    ReleasePlannerError
    ├── ConfigError
    ├── BoundaryNotFoundError
    ├── ManifestError
    └── ForgeAPIError
"""

from __future__ import annotations

__all__ = [
    'BoundaryNotFoundError',
    'ConfigError',
    'ForgeAPIError',
    'ManifestError',
    'ReleasePlannerError',
]


class ReleasePlannerError(Exception):
    """Base class for all errors raised by releaseplanner.

    Args:
        message: What went wrong.
        hint: Optional suggestion for fixing it.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        """Initialize with a message and an optional hint."""
        super().__init__(message)
        self.message = message
        self.hint = hint

    def __str__(self) -> str:
        """Return the message, with the hint appended when present."""
        if self.hint:
            return f'{self.message} (hint: {self.hint})'
        return self.message


class ConfigError(ReleasePlannerError):
    """Invalid or unreadable configuration."""


class BoundaryNotFoundError(ReleasePlannerError):
    """The previous release tag's commit is not in the fetched history.

    Raised instead of silently treating the whole fetched window as
    unreleased, which would double-count already released commits.
    """

    def __init__(self, tag: str, sha: str | None) -> None:
        """Initialize with the tag name and the commit it points at."""
        if sha is None:
            message = f'tag {tag} does not reference a commit'
        else:
            message = f'commit {sha} of tag {tag} is not in the fetched history'
        super().__init__(
            message,
            hint='Raise the commit fetch limit or check that the tag is on the target branch.',
        )
        self.tag = tag
        self.sha = sha


class ManifestError(ReleasePlannerError):
    """A manifest does not contain a version field that can be rewritten."""


class ForgeAPIError(ReleasePlannerError):
    """A request to the hosting platform failed.

    Attributes:
        status: HTTP status code.
        method: HTTP method of the failed request.
        url: Full request URL.
        body: Decoded error body (JSON object, text, or ``None``).
    """

    def __init__(
        self,
        message: str,
        *,
        status: int,
        method: str,
        url: str,
        body: object = None,
    ) -> None:
        """Initialize from the failed response."""
        super().__init__(message)
        self.status = status
        self.method = method
        self.url = url
        self.body = body

    def __str__(self) -> str:
        """Return ``METHOD URL -> STATUS: message``."""
        return f'{self.method} {self.url} -> {self.status}: {self.message}'
