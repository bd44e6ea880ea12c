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

"""Semantic version value type.

:class:`Version` is immutable and totally ordered.  Ordering follows
`SemVer 2.0.0 precedence <https://semver.org/#spec-item-11>`_:

- ``major``, ``minor``, ``patch`` compare numerically.
- A prerelease sorts before the matching release
  (``1.0.0-rc.1 < 1.0.0``).
- Prerelease identifiers compare left to right; numeric identifiers
  compare as integers and sort before alphanumeric ones; a shorter
  identifier list sorts first when all shared identifiers are equal.

SemVer ignores build metadata for precedence.  Here it is compared
last (lexically) so that ``a == b`` exactly when neither ``a < b`` nor
``b < a``.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass
from typing import Final

__all__ = [
    'Version',
]

# Numeric prerelease identifiers must not have leading zeros.
_PRE_IDENT = r'(?:0|[1-9]\d*|\d*[A-Za-z-][0-9A-Za-z-]*)'

_VERSION_RE: Final[re.Pattern[str]] = re.compile(
    r'^(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)'
    rf'(?:-(?P<prerelease>{_PRE_IDENT}(?:\.{_PRE_IDENT})*))?'
    r'(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$',
)


def _prerelease_key(label: str) -> tuple[tuple[int, int | str], ...]:
    """Sort key for a prerelease label.

    Numeric identifiers get ``(0, n)`` and alphanumeric ones ``(1, s)``
    so numbers always sort first.
    """
    return tuple((0, int(part)) if part.isdigit() else (1, part) for part in label.split('.'))


@functools.total_ordering
@dataclass(frozen=True)
class Version:
    """A semantic version.

    Attributes:
        major: Major version number.
        minor: Minor version number.
        patch: Patch version number.
        prerelease: Prerelease label without the leading ``-``
            (e.g. ``"rc.1"``), or ``None``.
        build: Build metadata without the leading ``+``, or ``None``.
    """

    major: int
    minor: int
    patch: int
    prerelease: str | None = None
    build: str | None = None

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a version string such as ``1.2.3-rc.1+build.5``.

        Raises:
            ValueError: If *text* is not a valid semantic version.
        """
        m = _VERSION_RE.match(text.strip())
        if m is None:
            raise ValueError(f'invalid semantic version: {text!r}')
        return cls(
            major=int(m.group('major')),
            minor=int(m.group('minor')),
            patch=int(m.group('patch')),
            prerelease=m.group('prerelease'),
            build=m.group('build'),
        )

    @classmethod
    def try_parse(cls, text: str) -> Version | None:
        """Like :meth:`parse` but return ``None`` instead of raising."""
        try:
            return cls.parse(text)
        except ValueError:
            return None

    def __str__(self) -> str:
        text = f'{self.major}.{self.minor}.{self.patch}'
        if self.prerelease:
            text += f'-{self.prerelease}'
        if self.build:
            text += f'+{self.build}'
        return text

    def _sort_key(self) -> tuple[object, ...]:
        if self.prerelease is None:
            pre: tuple[object, ...] = (1,)
        else:
            pre = (0, _prerelease_key(self.prerelease))
        return (self.major, self.minor, self.patch, pre, self.build or '')

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    @property
    def is_prerelease(self) -> bool:
        """``True`` when a prerelease label is present."""
        return self.prerelease is not None

    def finalize(self) -> Version:
        """Return the release version with labels dropped."""
        return Version(self.major, self.minor, self.patch)

    def bump_major(self) -> Version:
        """Increment major and reset minor and patch."""
        return Version(self.major + 1, 0, 0)

    def bump_minor(self) -> Version:
        """Increment minor and reset patch."""
        return Version(self.major, self.minor + 1, 0)

    def bump_patch(self) -> Version:
        """Increment patch."""
        return Version(self.major, self.minor, self.patch + 1)
