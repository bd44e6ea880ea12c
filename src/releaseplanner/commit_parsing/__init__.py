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

r"""Commit message classification.

The :class:`CommitParser` protocol lets callers plug in another message
convention while keeping the same version-bump and changelog machinery.
The built-in :class:`ConventionalCommitParser` implements Conventional
Commits v1.0.0.

Usage::

    from releaseplanner.commit_parsing import BumpType, parse_conventional_commit

    cc = parse_conventional_commit('fix(api): handle empty body')
    assert cc.scope == 'api'
    assert cc.bump == BumpType.PATCH

    assert parse_conventional_commit('Merge branch main') is None
"""

from releaseplanner.commit_parsing._conventional import (
    CC_PATTERN,
    MINOR_TYPES,
    PATCH_TYPES,
    ConventionalCommitParser,
    is_breaking_token,
    parse_commits,
)
from releaseplanner.commit_parsing._types import (
    BUMP_PRECEDENCE,
    BumpType,
    CommitParser,
    ParsedCommit,
    max_bump,
)

_DEFAULT_PARSER = ConventionalCommitParser()


def parse_conventional_commit(message: str, sha: str = '') -> ParsedCommit | None:
    """Parse *message* with the default Conventional Commits parser."""
    return _DEFAULT_PARSER.parse(message, sha=sha)


__all__ = [
    'BUMP_PRECEDENCE',
    'CC_PATTERN',
    'MINOR_TYPES',
    'PATCH_TYPES',
    'BumpType',
    'CommitParser',
    'ConventionalCommitParser',
    'ParsedCommit',
    'is_breaking_token',
    'max_bump',
    'parse_commits',
    'parse_conventional_commit',
]
