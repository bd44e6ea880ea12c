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

"""Changelog entry synthesis and merging.

The rendered text is a stable contract that other tooling parses, so
it must not change between runs for the same input::

    ## [1.3.0](https://git.example/octo/demo/compare/v1.2.0...v1.3.0) (2026-05-01)


    ### ⚠ BREAKING CHANGES

    * **api:** the v1 endpoints are gone ([0a1b2c3](https://git.example/octo/demo/commit/0a1b2c3...))

    ### Features

    * **api:** v2 endpoints ([0a1b2c3](https://git.example/octo/demo/commit/0a1b2c3...))

Sections come in a fixed order: breaking changes first, then the
configured sections (features, fixes, then the rest).  Empty sections
are omitted.  Links are only rendered when a host is known.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Final

from releaseplanner.commit_parsing import ParsedCommit

__all__ = [
    'BREAKING_SECTION_TITLE',
    'DEFAULT_CHANGELOG_HEADER',
    'DEFAULT_SECTION_RULES',
    'ChangelogContext',
    'ChangelogSection',
    'SectionRule',
    'build_changelog_entry',
    'group_commits',
    'update_changelog',
]

BREAKING_SECTION_TITLE: Final[str] = '⚠ BREAKING CHANGES'

DEFAULT_CHANGELOG_HEADER: Final[str] = '# Changelog'


@dataclass(frozen=True)
class SectionRule:
    """Maps a commit type to a changelog section title.

    Types that map to the same title share one section.
    """

    type: str
    section: str
    hidden: bool = False


DEFAULT_SECTION_RULES: Final[tuple[SectionRule, ...]] = (
    SectionRule('feat', 'Features'),
    SectionRule('fix', 'Bug Fixes'),
    SectionRule('perf', 'Performance Improvements'),
    SectionRule('revert', 'Reverts'),
    SectionRule('docs', 'Documentation', hidden=True),
    SectionRule('style', 'Styles', hidden=True),
    SectionRule('chore', 'Miscellaneous Chores', hidden=True),
    SectionRule('refactor', 'Code Refactoring', hidden=True),
    SectionRule('test', 'Tests', hidden=True),
    SectionRule('build', 'Build System', hidden=True),
    SectionRule('ci', 'Continuous Integration', hidden=True),
)


@dataclass(frozen=True)
class ChangelogSection:
    """A titled group of commits in one changelog entry."""

    title: str
    commits: tuple[ParsedCommit, ...]


@dataclass(frozen=True)
class ChangelogContext:
    """Release facts that go into the entry heading and links.

    Attributes:
        version: The new version string.
        current_tag: The tag the release will get.
        previous_tag: The previous release tag, or ``None``.
        release_date: Date shown in the heading.
        host: Forge web root such as ``https://gitea.com``; no links
            are rendered when ``None``.
        owner: Repository owner for links.
        repo: Repository name for links.
    """

    version: str
    current_tag: str
    previous_tag: str | None
    release_date: date
    host: str | None = None
    owner: str = ''
    repo: str = ''

    @property
    def repository_url(self) -> str | None:
        """Web URL of the repository, or ``None`` without a host."""
        if not self.host:
            return None
        return f'{self.host.rstrip("/")}/{self.owner}/{self.repo}'


def group_commits(
    commits: Iterable[ParsedCommit],
    rules: Sequence[SectionRule] = DEFAULT_SECTION_RULES,
) -> list[ChangelogSection]:
    """Group commits into non-empty sections in display order.

    Breaking commits appear in the breaking section and again under
    their type.  Commits whose type has no rule, or a hidden one, are
    left out of the type sections.
    """
    commits = list(commits)
    order: list[str] = []
    title_for_type: dict[str, str] = {}
    for rule in rules:
        if rule.hidden or rule.type in title_for_type:
            continue
        title_for_type[rule.type] = rule.section
        if rule.section not in order:
            order.append(rule.section)

    by_title: dict[str, list[ParsedCommit]] = {title: [] for title in order}
    for commit in commits:
        title = title_for_type.get(commit.type)
        if title is not None:
            by_title[title].append(commit)

    sections: list[ChangelogSection] = []
    breaking = tuple(c for c in commits if c.breaking)
    if breaking:
        sections.append(ChangelogSection(BREAKING_SECTION_TITLE, breaking))
    sections.extend(ChangelogSection(title, tuple(by_title[title])) for title in order if by_title[title])
    return sections


def _bullet(commit: ParsedCommit, text: str, repository_url: str | None) -> str:
    scope = f'**{commit.scope}:** ' if commit.scope else ''
    link = ''
    if repository_url and commit.sha:
        link = f' ([{commit.short_sha}]({repository_url}/commit/{commit.sha}))'
    return f'* {scope}{text.replace(chr(10), chr(10) + "  ")}{link}'


def _heading(context: ChangelogContext) -> str:
    day = context.release_date.isoformat()
    repository_url = context.repository_url
    if repository_url and context.previous_tag:
        compare = f'{repository_url}/compare/{context.previous_tag}...{context.current_tag}'
        return f'## [{context.version}]({compare}) ({day})'
    return f'## {context.version} ({day})'


def build_changelog_entry(
    commits: Iterable[ParsedCommit],
    context: ChangelogContext,
    rules: Sequence[SectionRule] = DEFAULT_SECTION_RULES,
) -> str:
    """Render the changelog entry for one release (no trailing newline)."""
    repository_url = context.repository_url
    lines = [_heading(context), '', '']
    for section in group_commits(commits, rules):
        lines.append(f'### {section.title}')
        lines.append('')
        for commit in section.commits:
            text = commit.breaking_description if section.title == BREAKING_SECTION_TITLE else commit.description
            lines.append(_bullet(commit, text, repository_url))
        lines.append('')
    return '\n'.join(lines).rstrip('\n')


_H1_RE: Final[re.Pattern[str]] = re.compile(r'^# .*$', re.MULTILINE)
_H2_RE: Final[re.Pattern[str]] = re.compile(r'^## ', re.MULTILINE)


def update_changelog(existing: str | None, entry: str) -> str:
    """Merge *entry* into existing changelog text.

    The entry goes right after the document's top-level heading, or at
    the very top when there is none.  Existing entries are kept as they
    are.  ``None`` or blank content yields a new document.
    """
    if existing is None or not existing.strip():
        return f'{DEFAULT_CHANGELOG_HEADER}\n\n{entry}\n'

    h1 = _H1_RE.search(existing)
    h2 = _H2_RE.search(existing)
    if h1 is None or (h2 is not None and h2.start() < h1.start()):
        rest = existing.lstrip('\n')
        return f'{entry}\n\n{rest}'

    head = existing[: h1.end()]
    rest = existing[h1.end() :].lstrip('\n')
    if not rest:
        return f'{head}\n\n{entry}\n'
    return f'{head}\n\n{entry}\n\n{rest}'
