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

r"""Conventional Commits v1.0.0 parser.

Grammar handled::

    type(scope)!: description
    <blank line>
    body paragraphs (optional)
    <blank line>
    Token: value          <- footers (optional)
    Token #value
    BREAKING CHANGE: text

- The subject line is required; scope and ``!`` are optional.
- Footers are the final paragraph of the message when its first line
  is a git trailer.  Lines that are not trailers continue the value of
  the previous footer.
- Footer tokens use ``-`` in place of spaces, except ``BREAKING CHANGE``.
- ``BREAKING CHANGE`` and ``BREAKING-CHANGE`` mark a breaking change in
  any letter case, as does ``!`` before the colon.
- Types are case-insensitive and normalised to lowercase.

Messages that do not match are not errors: :meth:`parse` returns
``None`` and :func:`parse_commits` leaves them out.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING, Final

from releaseplanner._types import RawCommit
from releaseplanner.commit_parsing._types import BumpType, CommitParser, ParsedCommit

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

# Major is only via "!" or a BREAKING CHANGE footer.
MINOR_TYPES: Final[frozenset[str]] = frozenset({'feat'})
PATCH_TYPES: Final[frozenset[str]] = frozenset({'fix', 'perf'})

CC_PATTERN: Final[re.Pattern[str]] = re.compile(
    r'^(?P<type>[a-zA-Z]+)'  # type (e.g. feat, fix, chore)
    r'(?:\((?P<scope>[^()]*)\))?'  # optional scope in parens
    r'(?P<breaking>!)?'  # optional breaking change indicator
    r':\s*'
    r'(?P<description>\S.*)$',
)

_FOOTER_PATTERN: Final[re.Pattern[str]] = re.compile(
    r'^(?P<token>BREAKING[- ]CHANGE|[A-Za-z][\w-]*)'
    r'(?::(?:\s|$)|\s+#)'  # "token: value" or "token #value"
    r'(?P<value>.*)$',
    re.IGNORECASE,
)

_BREAKING_TOKEN: Final[re.Pattern[str]] = re.compile(r'^BREAKING[- ]CHANGE$', re.IGNORECASE)


def is_breaking_token(token: str) -> bool:
    """Return ``True`` for ``BREAKING CHANGE`` / ``BREAKING-CHANGE`` in any case."""
    return bool(_BREAKING_TOKEN.match(token))


def _split_paragraphs(lines: list[str]) -> list[list[str]]:
    paragraphs: list[list[str]] = []
    current: list[str] = []
    for line in lines:
        if line.strip():
            current.append(line)
        elif current:
            paragraphs.append(current)
            current = []
    if current:
        paragraphs.append(current)
    return paragraphs


def _parse_body_and_footers(lines: list[str]) -> tuple[str, tuple[tuple[str, str], ...]]:
    """Split the lines after the subject into body and footers.

    Args:
        lines: Every line after the subject line.

    Returns:
        ``(body, footers)`` where ``footers`` keeps declaration order
        and repeated tokens.
    """
    paragraphs = _split_paragraphs(lines)
    start = next((i for i, p in enumerate(paragraphs) if _FOOTER_PATTERN.match(p[0])), len(paragraphs))
    body = '\n\n'.join('\n'.join(p) for p in paragraphs[:start]).strip()
    if start == len(paragraphs):
        return body, ()

    # Everything from the first trailer paragraph on is footers; blank
    # lines inside a footer value are kept.
    footers: list[tuple[str, str]] = []
    token = ''
    value_lines: list[str] = []
    for index, paragraph in enumerate(paragraphs[start:]):
        if index:
            value_lines.append('')
        for line in paragraph:
            m = _FOOTER_PATTERN.match(line)
            if m:
                if token:
                    footers.append((token, '\n'.join(value_lines).strip()))
                token = m.group('token')
                value_lines = [m.group('value')]
            else:
                value_lines.append(line)
    footers.append((token, '\n'.join(value_lines).strip()))
    return body, tuple(footers)


class ConventionalCommitParser:
    r"""Parser for `Conventional Commits v1.0.0 <https://www.conventionalcommits.org/en/v1.0.0/>`_.

    Example::

        parser = ConventionalCommitParser()
        cc = parser.parse('feat(auth)!: drop basic auth\n\nBREAKING CHANGE: use tokens')
        assert cc.type == 'feat'
        assert cc.scope == 'auth'
        assert cc.breaking_description == 'use tokens'
        assert cc.bump == BumpType.MAJOR
    """

    def parse(self, message: str, sha: str = '') -> ParsedCommit | None:
        """Parse a full commit message.

        Args:
            message: The commit message (subject, optional body and footers).
            sha: The commit SHA, copied into the result.

        Returns:
            A :class:`ParsedCommit`, or ``None`` if the subject line does
            not follow the convention.
        """
        all_lines = message.replace('\r\n', '\n').split('\n')
        match = CC_PATTERN.match(all_lines[0].strip())
        if not match:
            return None

        cc_type = match.group('type').lower()
        scope = match.group('scope') or None
        description = match.group('description').strip()

        body, footers = _parse_body_and_footers(all_lines[1:])

        breaking_notes = [value for token, value in footers if is_breaking_token(token)]
        breaking = bool(match.group('breaking')) or bool(breaking_notes)
        breaking_description = breaking_notes[0] if breaking_notes else ''
        if breaking and not breaking_description:
            breaking_description = description

        if breaking:
            bump = BumpType.MAJOR
        elif cc_type in MINOR_TYPES:
            bump = BumpType.MINOR
        elif cc_type in PATCH_TYPES:
            bump = BumpType.PATCH
        else:
            bump = BumpType.NONE

        return ParsedCommit(
            sha=sha,
            type=cc_type,
            scope=scope,
            description=description,
            body=body,
            footers=footers,
            breaking=breaking,
            breaking_description=breaking_description,
            bump=bump,
            raw=message,
        )


def parse_commits(
    commits: Iterable[RawCommit],
    parser: CommitParser | None = None,
    *,
    log: BoundLogger | None = None,
) -> list[ParsedCommit]:
    """Classify a batch of commits, dropping the ones that do not parse.

    Order is preserved.

    Args:
        commits: Raw commits, newest first.
        parser: Parser to use; defaults to :class:`ConventionalCommitParser`.
        log: Optional logger; skipped commits are reported at debug level.
    """
    parser = parser or ConventionalCommitParser()
    parsed: list[ParsedCommit] = []
    for commit in commits:
        cc = parser.parse(commit.message, sha=commit.sha)
        if cc is None:
            if log is not None:
                log.debug('commit_not_conventional', sha=commit.sha, subject=commit.message.split('\n', 1)[0])
            continue
        parsed.append(cc)
    return parsed
