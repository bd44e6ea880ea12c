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

"""Staged file updates for a release pull request.

Nothing here performs I/O.  The stager receives the current state of
each target file (content plus revision marker, or ``None`` when the
forge reported it missing) and returns :class:`FileUpdate` descriptors
that carry the revision marker through unchanged:

- marker present: update in place (and detect concurrent edits),
- marker absent: create the file.

Manifest rewriting goes through the :class:`VersionSplicer` protocol.
Every splicer only touches the version value and keeps all other bytes
of the file as they were.

Built-in splicers::

    ┌──────────────────────────┬──────────────────────────────────────────┐
    │ Splicer                  │ Rewrites                                 │
    ├──────────────────────────┼──────────────────────────────────────────┤
    │ JsonVersionSplicer       │ string values at JSON member paths       │
    │                          │ (package.json, package-lock.json)        │
    │ PyProjectVersionSplicer  │ [project].version or                     │
    │                          │ [tool.poetry].version via tomlkit        │
    │ RegexVersionSplicer      │ the named ``version`` group of a regex   │
    │                          │ (``__version__ = "..."`` by default)     │
    └──────────────────────────┴──────────────────────────────────────────┘
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Protocol, runtime_checkable

import tomlkit
import tomlkit.exceptions

from releaseplanner._types import FileContent
from releaseplanner.changelog import update_changelog
from releaseplanner.errors import ManifestError
from releaseplanner.versions import Version

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

__all__ = [
    'FileUpdate',
    'JsonVersionSplicer',
    'Manifest',
    'PyProjectVersionSplicer',
    'RegexVersionSplicer',
    'VersionSplicer',
    'splicer_for_kind',
    'stage_file_updates',
]


@dataclass(frozen=True)
class FileUpdate:
    """One file edit of the release pull request.

    Attributes:
        path: Repository-relative path.
        content: Full new content of the file.
        revision: Revision marker of the file as it was read, or
            ``None`` when the file does not exist yet.
        message: Commit message for the edit.
    """

    path: str
    content: str
    revision: str | None
    message: str

    @property
    def creates(self) -> bool:
        """``True`` when the update creates a new file."""
        return self.revision is None


@runtime_checkable
class VersionSplicer(Protocol):
    """Replaces the version in structured file content."""

    def splice(self, content: str, version: Version) -> str:
        """Return *content* with its version set to *version*.

        Raises:
            ManifestError: If no version field can be found.
        """
        ...


_WS: Final[str] = ' \t\r\n'


def _skip_ws(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _WS:
        pos += 1
    return pos


def _find_json_member(text: str, path: Sequence[str]) -> tuple[int, int] | None:
    """Return the ``[start, end)`` span of the value at *path*.

    Walks the raw text so the caller can replace exactly that span.
    Values that are not on the path are skipped with
    :meth:`json.JSONDecoder.raw_decode`.
    """
    decoder = json.JSONDecoder()
    pos = _skip_ws(text, 0)
    for key in path:
        if text[pos : pos + 1] != '{':
            return None
        pos = _skip_ws(text, pos + 1)
        while True:
            if text[pos : pos + 1] != '"':
                return None
            name, pos = decoder.raw_decode(text, pos)
            pos = _skip_ws(text, pos)
            if text[pos : pos + 1] != ':':
                return None
            pos = _skip_ws(text, pos + 1)
            if name == key:
                break
            _, pos = decoder.raw_decode(text, pos)
            pos = _skip_ws(text, pos)
            if text[pos : pos + 1] != ',':
                return None
            pos = _skip_ws(text, pos + 1)
    _, end = decoder.raw_decode(text, pos)
    return pos, end


class JsonVersionSplicer:
    """Rewrites string values at JSON member paths.

    Args:
        paths: Member paths that must exist, e.g. ``[('version',)]``.
        optional_paths: Member paths rewritten only when present.
    """

    def __init__(
        self,
        paths: Sequence[Sequence[str]] = (('version',),),
        optional_paths: Sequence[Sequence[str]] = (),
    ) -> None:
        """Initialize with the member paths to rewrite."""
        self._paths = [tuple(p) for p in paths]
        self._optional_paths = [tuple(p) for p in optional_paths]

    def splice(self, content: str, version: Version) -> str:
        """Rewrite every configured path, keeping all other bytes."""
        try:
            json.loads(content)
        except json.JSONDecodeError as exc:
            raise ManifestError(f'invalid JSON manifest: {exc}') from exc
        for path, required in [(p, True) for p in self._paths] + [(p, False) for p in self._optional_paths]:
            span = _find_json_member(content, path)
            if span is None:
                if required:
                    raise ManifestError(f'no {".".join(repr(k) for k in path)} member in JSON manifest')
                continue
            start, end = span
            content = content[:start] + json.dumps(str(version)) + content[end:]
        return content


class PyProjectVersionSplicer:
    """Rewrites ``[project].version`` or ``[tool.poetry].version``.

    Uses ``tomlkit`` so comments, ordering and quoting elsewhere in the
    file survive.
    """

    def splice(self, content: str, version: Version) -> str:
        """Set the version in the first table that declares one."""
        try:
            doc = tomlkit.parse(content)
        except tomlkit.exceptions.ParseError as exc:
            raise ManifestError(f'invalid pyproject.toml: {exc}') from exc

        project = doc.get('project')
        if isinstance(project, Mapping) and 'version' in project:
            project['version'] = str(version)  # type: ignore[index]  # tomlkit
            return tomlkit.dumps(doc)

        poetry = doc.get('tool', {}).get('poetry')
        if isinstance(poetry, Mapping) and 'version' in poetry:
            poetry['version'] = str(version)  # type: ignore[index]  # tomlkit
            return tomlkit.dumps(doc)

        raise ManifestError('no [project].version or [tool.poetry].version in pyproject.toml')


DEFAULT_VERSION_PATTERN: Final[str] = r'^__version__\s*=\s*["\'](?P<version>[^"\']+)["\']'


class RegexVersionSplicer:
    """Replaces the first match of the named ``version`` group.

    Args:
        pattern: Regular expression (multiline) with a ``version`` group.
    """

    def __init__(self, pattern: str = DEFAULT_VERSION_PATTERN) -> None:
        """Compile *pattern*; it must define a ``version`` group."""
        self._pattern = re.compile(pattern, re.MULTILINE)
        if 'version' not in self._pattern.groupindex:
            raise ValueError(f'pattern has no (?P<version>...) group: {pattern!r}')

    def splice(self, content: str, version: Version) -> str:
        """Replace the version span of the first match."""
        m = self._pattern.search(content)
        if m is None:
            raise ManifestError(f'version pattern not found: {self._pattern.pattern!r}')
        start, end = m.span('version')
        return content[:start] + str(version) + content[end:]


def splicer_for_kind(kind: str, pattern: str | None = None) -> VersionSplicer:
    """Return the built-in splicer for a configured manifest kind.

    Raises:
        ValueError: For an unknown kind.
    """
    if kind == 'json':
        return JsonVersionSplicer()
    if kind == 'package-lock':
        return JsonVersionSplicer(optional_paths=[('packages', '', 'version')])
    if kind == 'pyproject':
        return PyProjectVersionSplicer()
    if kind == 'regex':
        return RegexVersionSplicer(pattern or DEFAULT_VERSION_PATTERN)
    raise ValueError(f'unknown manifest kind: {kind!r}')


@dataclass(frozen=True)
class Manifest:
    """A file whose version is bumped with each release.

    Attributes:
        path: Repository-relative path.
        splicer: How to rewrite the version.
        template: Content to start from when the file does not exist;
            without one a missing manifest is skipped.
    """

    path: str
    splicer: VersionSplicer
    template: str | None = None


def stage_file_updates(
    files: Mapping[str, FileContent | None],
    *,
    changelog_path: str,
    changelog_entry: str,
    version: Version,
    manifests: Sequence[Manifest] = (),
    message: str,
    log: BoundLogger | None = None,
) -> tuple[FileUpdate, ...]:
    """Compute the file updates of a release, changelog first.

    Args:
        files: Current state of every target path; ``None`` or a
            missing key means the file does not exist.
        changelog_path: Path of the changelog file.
        changelog_entry: Rendered entry for the new release.
        version: The new version.
        manifests: Version manifests, in update order.
        message: Commit message for every update.
        log: Optional logger for skipped manifests.

    Raises:
        ManifestError: An existing manifest has no version to rewrite.
    """
    current = files.get(changelog_path)
    updates = [
        FileUpdate(
            path=changelog_path,
            content=update_changelog(current.content if current else None, changelog_entry),
            revision=current.revision if current else None,
            message=message,
        ),
    ]
    seen = {changelog_path}

    for manifest in manifests:
        if manifest.path in seen:
            continue
        seen.add(manifest.path)
        current = files.get(manifest.path)
        if current is None and manifest.template is None:
            if log is not None:
                log.debug('manifest_missing', path=manifest.path)
            continue
        base = current.content if current is not None else manifest.template
        try:
            content = manifest.splicer.splice(base or '', version)
        except ManifestError as exc:
            raise ManifestError(f'{manifest.path}: {exc.message}') from exc
        updates.append(
            FileUpdate(
                path=manifest.path,
                content=content,
                revision=current.revision if current is not None else None,
                message=message,
            ),
        )
    return tuple(updates)
