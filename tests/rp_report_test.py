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


"""Tests for releaseplanner.report."""

from __future__ import annotations

from datetime import date
from unittest.mock import MagicMock

from rich.console import Console
from releaseplanner._types import FileContent, RawCommit, RepositoryInfo, TagRef
from releaseplanner.plan import NothingToRelease, ReleasePlanOptions, build_release_plan
from releaseplanner.report import render_plan
from releaseplanner.snapshot import RepositorySnapshot
from releaseplanner.updaters import Manifest, splicer_for_kind


def _render(outcome: object) -> str:
    console = Console(record=True, width=120, color_system=None)
    render_plan(outcome, console=console)  # type: ignore[arg-type]
    return console.export_text()


class TestRenderNothingToRelease:
    """Tests for rendering a NothingToRelease outcome."""

    def test_with_previous_tag(self) -> None:
        """Test with previous tag."""
        text = _render(NothingToRelease('no_releasable_changes', 'v1.2.0', 3))
        assert 'Nothing to release since v1.2.0: no feature, fix or breaking change (3 commit(s)).' in text

    def test_without_previous_tag(self) -> None:
        """Test without previous tag."""
        text = _render(NothingToRelease('no_conventional_commits', None, 0))
        assert 'Nothing to release: no conventional commits (0 commit(s)).' in text


class TestRenderPlanned:
    """Tests for rendering a Planned outcome."""

    def test_summary_and_updates(self) -> None:
        """The summary shows the tag and every staged file."""
        snapshot = RepositorySnapshot(
            repository=RepositoryInfo('octo', 'demo', 'main', 'https://gitea.example/octo/demo'),
            target_branch='main',
            tags=(TagRef('v1.2.0', 'abc123'),),
            commits=(
                RawCommit('def456', 'feat: add new capability', ('abc123',)),
                RawCommit('abc123', 'chore(main): release 1.2.0'),
            ),
            files={
                'CHANGELOG.md': None,
                'package.json': FileContent('{\n  "version": "1.2.0"\n}\n', 'pkgsha'),
            },
            release_date=date(2026, 5, 1),
        )
        options = ReleasePlanOptions(manifests=(Manifest('package.json', splicer_for_kind('json')),))
        text = _render(build_release_plan(snapshot, options, log=MagicMock()))

        assert '1.3.0' in text
        assert 'v1.2.0' in text
        assert 'v1.3.0' in text
        assert 'release-please--branches--main' in text
        assert 'chore(main): release 1.3.0' in text
        assert 'CHANGELOG.md' in text
        assert 'create' in text
        assert 'package.json' in text
        assert 'update' in text

    def test_first_release_has_no_previous_tag(self) -> None:
        """Test first release has no previous tag."""
        snapshot = RepositorySnapshot(
            repository=RepositoryInfo('octo', 'demo'),
            target_branch='main',
            tags=(),
            commits=(RawCommit('a1', 'feat: initial'),),
            release_date=date(2026, 5, 1),
        )
        text = _render(build_release_plan(snapshot, ReleasePlanOptions(), log=MagicMock()))
        assert '(none)' in text
