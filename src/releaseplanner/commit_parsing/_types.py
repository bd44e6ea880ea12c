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

"""Pure types for commit message classification.

Everything here is a frozen dataclass, enum, or protocol: no I/O, no
logging, no side effects.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, runtime_checkable


class BumpType(Enum):
    """Semver bump types, ordered by precedence (highest first).

    When several commits are released together the strongest bump
    wins: a ``feat:`` next to a ``fix:`` yields ``MINOR``.
    """

    MAJOR = 'major'
    MINOR = 'minor'
    PATCH = 'patch'
    NONE = 'none'


# Lower index = higher precedence.
BUMP_PRECEDENCE: tuple[BumpType, ...] = (
    BumpType.MAJOR,
    BumpType.MINOR,
    BumpType.PATCH,
    BumpType.NONE,
)


def max_bump(a: BumpType, b: BumpType) -> BumpType:
    """Return the higher-precedence bump type.

    >>> max_bump(BumpType.MINOR, BumpType.PATCH)
    <BumpType.MINOR: 'minor'>
    >>> max_bump(BumpType.NONE, BumpType.MAJOR)
    <BumpType.MAJOR: 'major'>
    """
    return BUMP_PRECEDENCE[min(BUMP_PRECEDENCE.index(a), BUMP_PRECEDENCE.index(b))]


@dataclass(frozen=True)
class ParsedCommit:
    """A commit classified under the Conventional Commits grammar.

    Attributes:
        sha: The full commit SHA.
        type: The commit type, lowercased (e.g. ``"feat"``, ``"fix"``).
        description: The subject text after ``type(scope)!: ``.
        scope: The scope inside the parentheses, or ``None``.
        body: Free-form text between the subject and the footers.
        footers: Git trailers as ``(token, value)`` pairs in the order
            they appear.  Repeated tokens are all kept.
        breaking: Whether this is a breaking change (``!`` marker or a
            ``BREAKING CHANGE`` footer).
        breaking_description: Text of the ``BREAKING CHANGE`` footer,
            or the description when only ``!`` was used.
        bump: The bump this commit alone asks for.
        raw: The original message.
    """

    sha: str
    type: str
    description: str
    scope: str | None = None
    body: str = ''
    footers: tuple[tuple[str, str], ...] = ()
    breaking: bool = False
    breaking_description: str = ''
    bump: BumpType = BumpType.NONE
    raw: str = ''

    @property
    def short_sha(self) -> str:
        """First seven characters of the SHA."""
        return self.sha[:7]


@runtime_checkable
class CommitParser(Protocol):
    """Protocol for commit message parsers.

    A parser receives a full commit message and returns a
    :class:`ParsedCommit`, or ``None`` when the message does not follow
    its convention.  ``None`` is not an error; the commit is simply left
    out of version and changelog computation.
    """

    def parse(self, message: str, sha: str = '') -> ParsedCommit | None:
        """Parse *message*; return ``None`` if it does not match."""
        ...
