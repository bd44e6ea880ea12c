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

"""Tests for releaseplanner.changelog."""

from __future__ import annotations

from datetime import date

from releaseplanner.changelog import (
    BREAKING_SECTION_TITLE,
    ChangelogContext,
    SectionRule,
    build_changelog_entry,
    group_commits,
    update_changelog,
)
from releaseplanner.commit_parsing import ParsedCommit, parse_conventional_commit

SHA_FEAT = '0a1b2c3d4e5f60718293a4b5c6d7e8f901234567'
SHA_FIX = '1111111aaaaaaabbbbbbbcccccccdddddddeeeee'
SHA_BREAK = '2222222fffffff00000001111111222222233333'


def _cc(message: str, sha: str) -> ParsedCommit:
    cc = parse_conventional_commit(message, sha=sha)
    assert cc is not None
    return cc


FEAT = _cc('feat(api): v2 endpoints', SHA_FEAT)
FIX = _cc('fix: squash bug', SHA_FIX)
BREAK = _cc('refactor(api)!: drop v1\n\nBREAKING CHANGE: the v1 endpoints are gone', SHA_BREAK)
CHORE = _cc('chore: bump deps', SHA_FIX)

DAY = date(2026, 5, 1)

LINKED = ChangelogContext(
    version='1.3.0',
    current_tag='v1.3.0',
    previous_tag='v1.2.0',
    release_date=DAY,
    host='https://gitea.example',
    owner='octo',
    repo='demo',
)


class TestGroupCommits:
    """Tests for group_commits()."""

    def test_fixed_order_and_empty_sections_omitted(self) -> None:
        """Breaking first, then features, then fixes; hidden types dropped."""
        sections = group_commits([FIX, CHORE, FEAT, BREAK])
        assert [s.title for s in sections] == [BREAKING_SECTION_TITLE, 'Features', 'Bug Fixes']
        assert sections[0].commits == (BREAK,)

    def test_breaking_commit_also_under_its_type(self) -> None:
        """A breaking feature shows in both the breaking and the features section."""
        breaking_feat = _cc('feat!: new auth', SHA_BREAK)
        sections = group_commits([breaking_feat])
        assert [s.title for s in sections] == [BREAKING_SECTION_TITLE, 'Features']

    def test_shared_titles_merge(self) -> None:
        """Types mapped to the same title share one section."""
        rules = [SectionRule('feat', 'Changes'), SectionRule('fix', 'Changes')]
        sections = group_commits([FEAT, FIX], rules)
        assert len(sections) == 1
        assert sections[0].commits == (FEAT, FIX)

    def test_custom_rules_unhide(self) -> None:
        """A rule can make an otherwise hidden type visible."""
        sections = group_commits([CHORE], [SectionRule('chore', 'Chores')])
        assert [s.title for s in sections] == ['Chores']


class TestBuildChangelogEntry:
    """Tests for build_changelog_entry()."""

    def test_full_entry_with_links(self) -> None:
        """The entry text is byte-for-byte stable."""
        entry = build_changelog_entry([FEAT, FIX, BREAK], LINKED)
        assert entry == (
            '## [1.3.0](https://gitea.example/octo/demo/compare/v1.2.0...v1.3.0) (2026-05-01)\n'
            '\n'
            '\n'
            '### ⚠ BREAKING CHANGES\n'
            '\n'
            f'* **api:** the v1 endpoints are gone ([2222222](https://gitea.example/octo/demo/commit/{SHA_BREAK}))\n'
            '\n'
            '### Features\n'
            '\n'
            f'* **api:** v2 endpoints ([0a1b2c3](https://gitea.example/octo/demo/commit/{SHA_FEAT}))\n'
            '\n'
            '### Bug Fixes\n'
            '\n'
            f'* squash bug ([1111111](https://gitea.example/octo/demo/commit/{SHA_FIX}))'
        )

    def test_no_host_no_links(self) -> None:
        """Without a host neither the heading nor bullets carry links."""
        ctx = ChangelogContext(version='0.0.1', current_tag='v0.0.1', previous_tag=None, release_date=DAY)
        entry = build_changelog_entry([FIX], ctx)
        assert entry == '## 0.0.1 (2026-05-01)\n\n\n### Bug Fixes\n\n* squash bug'

    def test_initial_release_heading_without_compare(self) -> None:
        """No previous tag means no compare link, but bullets still link."""
        ctx = ChangelogContext(
            version='0.0.1',
            current_tag='v0.0.1',
            previous_tag=None,
            release_date=DAY,
            host='https://gitea.example/',
            owner='octo',
            repo='demo',
        )
        entry = build_changelog_entry([FIX], ctx)
        assert entry.startswith('## 0.0.1 (2026-05-01)\n')
        assert f'(https://gitea.example/octo/demo/commit/{SHA_FIX})' in entry

    def test_deterministic(self) -> None:
        """Same input, same output."""
        assert build_changelog_entry([FEAT, FIX], LINKED) == build_changelog_entry([FEAT, FIX], LINKED)


class TestUpdateChangelog:
    """Tests for update_changelog()."""

    ENTRY = '## 1.3.0 (2026-05-01)\n\n\n### Features\n\n* thing'

    def test_new_file(self) -> None:
        """A missing changelog becomes a new document."""
        assert update_changelog(None, self.ENTRY) == f'# Changelog\n\n{self.ENTRY}\n'

    def test_blank_file(self) -> None:
        """Whitespace-only content is treated as missing."""
        assert update_changelog('\n\n', self.ENTRY) == f'# Changelog\n\n{self.ENTRY}\n'

    def test_inserted_after_top_heading(self) -> None:
        """The entry goes after the H1; older entries are kept verbatim."""
        existing = (
            '# Changelog\n\n## [1.2.0](https://gitea.example/octo/demo/compare/v1.1.0...v1.2.0)\n\n- Previous release\n'
        )
        result = update_changelog(existing, self.ENTRY)
        assert result == (
            '# Changelog\n\n'
            f'{self.ENTRY}\n\n'
            '## [1.2.0](https://gitea.example/octo/demo/compare/v1.1.0...v1.2.0)\n\n- Previous release\n'
        )

    def test_no_heading_prepends(self) -> None:
        """Without a top-level heading the entry goes first."""
        existing = '## 1.2.0 (2026-01-01)\n\n* old\n'
        assert update_changelog(existing, self.ENTRY) == f'{self.ENTRY}\n\n{existing}'

    def test_h1_after_h2_is_not_the_top_heading(self) -> None:
        """An H1 below existing entries does not count as the document heading."""
        existing = '## 1.2.0\n\n* old\n\n# Appendix\n'
        assert update_changelog(existing, self.ENTRY).startswith(self.ENTRY)

    def test_heading_only(self) -> None:
        """A file with only the heading gets the entry and a final newline."""
        assert update_changelog('# Changelog\n', self.ENTRY) == f'# Changelog\n\n{self.ENTRY}\n'
