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

"""Release pull request title, body and head branch naming.

The strings produced here are read back by other release tooling
(release-please compatible), so their shape is fixed::

    title   chore(main): release 1.3.0
    branch  release-please--branches--main
            release-please--branches--main--components--api

Title patterns support the ``${scope}``, ``${component}``,
``${version}`` and ``${branch}`` placeholders.
"""

from __future__ import annotations

from typing import Final

__all__ = [
    'DEFAULT_PULL_REQUEST_FOOTER',
    'DEFAULT_PULL_REQUEST_HEADER',
    'DEFAULT_TITLE_PATTERN',
    'branch_name',
    'pull_request_body',
    'pull_request_title',
    'validate_title_pattern',
]

DEFAULT_TITLE_PATTERN: Final[str] = 'chore${scope}: release${component} ${version}'

DEFAULT_PULL_REQUEST_HEADER: Final[str] = ':robot: I have created a release *beep* *boop*'

DEFAULT_PULL_REQUEST_FOOTER: Final[str] = (
    'This PR was generated with [Release Please](https://github.com/googleapis/release-please). '
    'See [documentation](https://github.com/googleapis/release-please#release-please).'
)

_NOTES_DELIMITER: Final[str] = '---'

_BRANCH_PREFIX: Final[str] = 'release-please--branches--'


def validate_title_pattern(pattern: str) -> None:
    """Raise :class:`ValueError` if *pattern* cannot carry a version."""
    if '${version}' not in pattern:
        raise ValueError(f'pull request title pattern must contain ${{version}}: {pattern!r}')


def pull_request_title(
    target_branch: str,
    version: str,
    *,
    component: str | None = None,
    pattern: str | None = None,
) -> str:
    """Render the pull request title.

    >>> pull_request_title('main', '1.3.0')
    'chore(main): release 1.3.0'
    """
    pattern = pattern or DEFAULT_TITLE_PATTERN
    validate_title_pattern(pattern)
    return (
        pattern.replace('${scope}', f'({target_branch})' if target_branch else '')
        .replace('${component}', f' {component}' if component else '')
        .replace('${version}', version)
        .replace('${branch}', target_branch)
    )


def pull_request_body(
    notes: str,
    *,
    header: str | None = None,
    footer: str | None = None,
) -> str:
    """Render the pull request body around the release notes."""
    header = header or DEFAULT_PULL_REQUEST_HEADER
    footer = footer or DEFAULT_PULL_REQUEST_FOOTER
    return f'{header}\n{_NOTES_DELIMITER}\n{notes}\n\n{_NOTES_DELIMITER}\n{footer}'


def branch_name(target_branch: str, component: str | None = None) -> str:
    """Return the head branch the release pull request lives on."""
    if component:
        return f'{_BRANCH_PREFIX}{target_branch}--components--{component}'
    return f'{_BRANCH_PREFIX}{target_branch}'
