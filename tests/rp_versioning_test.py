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

"""Tests for releaseplanner.versioning."""

from __future__ import annotations

import pytest
from releaseplanner.commit_parsing import BumpType, ParsedCommit, parse_conventional_commit
from releaseplanner.versioning import VersioningPolicy, apply_bump, bump_version, determine_bump
from releaseplanner.versions import Version


def _cc(message: str) -> ParsedCommit:
    cc = parse_conventional_commit(message, sha='0' * 40)
    assert cc is not None
    return cc


FIX = _cc('fix: bug')
FEAT = _cc('feat: thing')
BREAKING = _cc('feat!: break')
CHORE = _cc('chore: tidy')
DOCS = _cc('docs: readme')

MINOR_PRE_MAJOR = VersioningPolicy(bump_minor_pre_major=True)
PATCH_FOR_MINOR = VersioningPolicy(bump_patch_for_minor_pre_major=True)
BOTH = VersioningPolicy(bump_minor_pre_major=True, bump_patch_for_minor_pre_major=True)


class TestPrecedence:
    """The strongest commit decides the bump."""

    def test_breaking_wins(self) -> None:
        """A breaking commit beats features and fixes."""
        assert bump_version(Version(1, 2, 0), [FIX, BREAKING, FEAT]) == Version(2, 0, 0)

    def test_feat_beats_fix(self) -> None:
        """Test feat beats fix."""
        assert bump_version(Version(1, 2, 0), [FIX, FEAT]) == Version(1, 3, 0)

    def test_fix_is_patch(self) -> None:
        """Test fix is patch."""
        assert bump_version(Version(1, 2, 0), [FIX, CHORE]) == Version(1, 2, 1)

    def test_no_releasable_commits(self) -> None:
        """Only chore/docs commits yield no version."""
        assert bump_version(Version(1, 2, 0), [CHORE, DOCS]) is None

    def test_empty(self) -> None:
        """No commits yield no version."""
        assert bump_version(Version(1, 2, 0), []) is None


class TestPreMajor:
    """Pinned pre-1.0 policy."""

    def test_breaking_default_is_major(self) -> None:
        """Without flags a breaking change below 1.0 bumps major."""
        assert bump_version(Version(0, 4, 2), [BREAKING]) == Version(1, 0, 0)

    def test_breaking_with_minor_flag(self) -> None:
        """bump_minor_pre_major turns breaking into minor."""
        assert bump_version(Version(0, 4, 2), [BREAKING], MINOR_PRE_MAJOR) == Version(0, 5, 0)

    def test_breaking_with_patch_flag(self) -> None:
        """bump_patch_for_minor_pre_major alone also keeps breaking at minor."""
        assert bump_version(Version(0, 4, 2), [BREAKING], PATCH_FOR_MINOR) == Version(0, 5, 0)

    def test_feat_with_patch_flag(self) -> None:
        """bump_patch_for_minor_pre_major turns features into patches."""
        assert bump_version(Version(0, 4, 2), [FEAT], PATCH_FOR_MINOR) == Version(0, 4, 3)

    def test_feat_with_minor_flag(self) -> None:
        """bump_minor_pre_major leaves features at minor."""
        assert bump_version(Version(0, 4, 2), [FEAT], MINOR_PRE_MAJOR) == Version(0, 5, 0)

    def test_both_flags_breaking(self) -> None:
        """With both flags a breaking change bumps minor."""
        assert bump_version(Version(0, 4, 2), [BREAKING, FEAT], BOTH) == Version(0, 5, 0)

    def test_both_flags_feat(self) -> None:
        """With both flags a feature bumps patch."""
        assert bump_version(Version(0, 4, 2), [FEAT, FIX], BOTH) == Version(0, 4, 3)

    def test_flags_ignored_after_1_0(self) -> None:
        """The flags only apply below 1.0.0."""
        assert bump_version(Version(1, 0, 0), [BREAKING], BOTH) == Version(2, 0, 0)
        assert determine_bump([FEAT], Version(1, 0, 0), BOTH) == BumpType.MINOR


class TestFinalization:
    """A prerelease is promoted, not bumped further."""

    @pytest.mark.parametrize('commit', [FIX, FEAT, BREAKING])
    def test_promotes_prerelease(self, commit: ParsedCommit) -> None:
        """Any qualifying bump of 1.3.0-rc.2 yields 1.3.0."""
        assert bump_version(Version.parse('1.3.0-rc.2'), [commit]) == Version(1, 3, 0)

    def test_no_bump_keeps_prerelease_unreleased(self) -> None:
        """Non-qualifying commits do not finalize."""
        assert apply_bump(Version.parse('1.3.0-rc.2'), BumpType.NONE) is None


class TestMonotonic:
    """A qualifying bump always yields a greater version."""

    @pytest.mark.parametrize('current', ['0.0.0', '0.1.9', '1.2.3', '2.0.0-beta.1', '3.4.5+build'])
    @pytest.mark.parametrize('policy', [VersioningPolicy(), MINOR_PRE_MAJOR, PATCH_FOR_MINOR, BOTH])
    @pytest.mark.parametrize('commits', [[FIX], [FEAT], [BREAKING], [CHORE, FIX]])
    def test_greater(self, current: str, policy: VersioningPolicy, commits: list[ParsedCommit]) -> None:
        """bump(current, commits) > current."""
        base = Version.parse(current)
        result = bump_version(base, commits, policy)
        assert result is not None
        assert result > base
