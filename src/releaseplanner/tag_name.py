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

"""Release tag names.

A tag is ``[component separator] [v] version``::

    v1.2.3              -> version 1.2.3, include_v
    1.2.3               -> version 1.2.3
    api-v1.2.3          -> component "api", separator "-", include_v
    packages/api/1.2.3  -> component "packages/api", separator "/"
    apiv1.2.3           -> component "api", separator "", include_v

Parsing is self-describing: component, separator and the ``v`` policy
are all recovered from the string, and ``TagName.parse(str(t)) == t``
for every :class:`TagName` that can be constructed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final

from releaseplanner.versions import Version

__all__ = [
    'SEPARATORS',
    'TagName',
]

SEPARATORS: Final[tuple[str, ...]] = ('-', '/', '')

_DEFAULT_SEPARATOR: Final[str] = '-'

# The component group is lazy and optional-first so that "v1.2.3" is
# never read as component "v".
_TAG_RE: Final[re.Pattern[str]] = re.compile(
    r'^(?:(?P<component>.+?)(?P<separator>[-/])?)??'
    r'(?P<v>v)?'
    r'(?P<version>\d+\.\d+\.\d+(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?)$',
)

_VERSION_CORE_RE: Final[re.Pattern[str]] = re.compile(r'\d+\.\d+\.\d+')


@dataclass(frozen=True)
class TagName:
    """A version plus the naming policy that turns it into a tag.

    Attributes:
        version: The released version.
        component: Component prefix, or ``None``.
        separator: Text between component and version: ``"-"``,
            ``"/"`` or ``""``.  Normalised to ``"-"`` without a component.
        include_v: Whether a literal ``v`` precedes the version.

    Raises:
        ValueError: For combinations that would not parse back to the
            same fields.
    """

    version: Version
    component: str | None = None
    separator: str = _DEFAULT_SEPARATOR
    include_v: bool = True

    def __post_init__(self) -> None:
        if self.separator not in SEPARATORS:
            raise ValueError(f'tag separator must be one of {SEPARATORS!r}, got {self.separator!r}')
        if self.component is None:
            object.__setattr__(self, 'separator', _DEFAULT_SEPARATOR)
            return
        if not self.component:
            raise ValueError('tag component must not be empty')
        if self.component[-1] in '-/':
            raise ValueError(f'tag component must not end with a separator: {self.component!r}')
        if _VERSION_CORE_RE.search(self.component):
            raise ValueError(f'tag component must not contain a version: {self.component!r}')
        if self.separator == '' and not self.include_v:
            raise ValueError('a tag without separator must include "v" before the version')

    @classmethod
    def parse(cls, raw: str) -> TagName | None:
        """Parse a tag string; ``None`` if it is not a release tag."""
        m = _TAG_RE.match(raw.strip())
        if m is None:
            return None
        version = Version.try_parse(m.group('version'))
        if version is None:
            return None
        try:
            return cls(
                version=version,
                component=m.group('component'),
                separator=m.group('separator') or '',
                include_v=m.group('v') is not None,
            )
        except ValueError:
            return None

    def __str__(self) -> str:
        prefix = f'{self.component}{self.separator}' if self.component else ''
        v = 'v' if self.include_v else ''
        return f'{prefix}{v}{self.version}'
