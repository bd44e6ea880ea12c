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

"""Next-version computation from classified commits.

Precedence over the whole commit set (first match wins)::

    ┌───────────────────────┬──────────────┬─────────────────────────────────┐
    │ Strongest commit      │ major >= 1   │ major == 0                      │
    ├───────────────────────┼──────────────┼─────────────────────────────────┤
    │ breaking (! / footer) │ major        │ minor if either pre-major flag  │
    │                       │              │ is set, otherwise major         │
    │ feat                  │ minor        │ patch if bump_patch_for_minor_  │
    │                       │              │ pre_major, otherwise minor      │
    │ fix / perf            │ patch        │ patch                           │
    │ anything else         │ no release   │ no release                      │
    └───────────────────────┴──────────────┴─────────────────────────────────┘

Finalization rule: when the current version is a prerelease, any
qualifying bump yields the same ``major.minor.patch`` without labels
(``1.3.0-rc.2`` + ``feat`` = ``1.3.0``, not ``1.4.0``).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from releaseplanner.commit_parsing import BumpType, ParsedCommit, max_bump
from releaseplanner.versions import Version

__all__ = [
    'VersioningPolicy',
    'apply_bump',
    'bump_version',
    'determine_bump',
]


@dataclass(frozen=True)
class VersioningPolicy:
    """Pre-1.0 bump overrides.

    Attributes:
        bump_minor_pre_major: Below 1.0.0, breaking changes bump minor.
        bump_patch_for_minor_pre_major: Below 1.0.0, features bump
            patch.  Breaking changes then bump minor as well.
    """

    bump_minor_pre_major: bool = False
    bump_patch_for_minor_pre_major: bool = False


def determine_bump(
    commits: Iterable[ParsedCommit],
    current: Version,
    policy: VersioningPolicy | None = None,
) -> BumpType:
    """Return the bump the commits ask for, after pre-major overrides."""
    policy = policy or VersioningPolicy()
    bump = BumpType.NONE
    for commit in commits:
        bump = max_bump(bump, commit.bump)

    if current.major == 0:
        if bump == BumpType.MAJOR and (policy.bump_minor_pre_major or policy.bump_patch_for_minor_pre_major):
            return BumpType.MINOR
        if bump == BumpType.MINOR and policy.bump_patch_for_minor_pre_major:
            return BumpType.PATCH
    return bump


def apply_bump(current: Version, bump: BumpType) -> Version | None:
    """Apply *bump* to *current*; ``None`` for :attr:`BumpType.NONE`."""
    if bump == BumpType.NONE:
        return None
    if current.is_prerelease:
        return current.finalize()
    if bump == BumpType.MAJOR:
        return current.bump_major()
    if bump == BumpType.MINOR:
        return current.bump_minor()
    return current.bump_patch()


def bump_version(
    current: Version,
    commits: Iterable[ParsedCommit],
    policy: VersioningPolicy | None = None,
) -> Version | None:
    """Return the next version, or ``None`` if no commit warrants a release.

    Args:
        current: The version of the previous release (or the initial
            version for a first release).
        commits: Classified commits since that release.
        policy: Pre-1.0 overrides.
    """
    return apply_bump(current, determine_bump(commits, current, policy))
