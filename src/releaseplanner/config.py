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

"""Release flow configuration.

Options live either in a dedicated ``releaseplanner.toml`` (top-level
keys) or in the ``[tool.releaseplanner]`` table of ``pyproject.toml``::

    [tool.releaseplanner]
    target_branch = "main"
    component = "api"
    bump_minor_pre_major = true

    [[tool.releaseplanner.changelog_sections]]
    type = "docs"
    section = "Documentation"

    [[tool.releaseplanner.manifests]]
    path = "package.json"
    kind = "json"

Every key is validated; unknown keys and wrongly typed values raise
:class:`~releaseplanner.errors.ConfigError`.
"""

from __future__ import annotations

import re
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from releaseplanner.changelog import SectionRule
from releaseplanner.errors import ConfigError
from releaseplanner.plan import ReleasePlanOptions
from releaseplanner.pull_request import validate_title_pattern
from releaseplanner.tag_name import SEPARATORS, TagName
from releaseplanner.updaters import Manifest, splicer_for_kind
from releaseplanner.versions import Version

__all__ = [
    'CONFIG_FILENAME',
    'MANIFEST_KINDS',
    'load_config',
    'parse_config',
]

CONFIG_FILENAME = 'releaseplanner.toml'

MANIFEST_KINDS: tuple[str, ...] = ('json', 'package-lock', 'pyproject', 'regex')

_BOOL_KEYS = frozenset({
    'include_component_in_tag',
    'include_v_in_tag',
    'bump_minor_pre_major',
    'bump_patch_for_minor_pre_major',
})

_STR_KEYS = frozenset({
    'target_branch',
    'component',
    'tag_separator',
    'changelog_path',
    'changelog_host',
    'pull_request_title_pattern',
    'pull_request_header',
    'pull_request_footer',
    'initial_version',
})

_VALID_KEYS = _BOOL_KEYS | _STR_KEYS | {'changelog_sections', 'manifests'}

_SECTION_KEYS = frozenset({'type', 'section', 'hidden'})

_MANIFEST_KEYS = frozenset({'path', 'kind', 'pattern', 'template'})

_EXAMPLE_VERSION = Version(0, 0, 0)


def _check_keys(raw: Mapping[str, Any], valid: frozenset[str], where: str) -> None:
    unknown = sorted(set(raw) - valid)
    if unknown:
        raise ConfigError(
            f'Unknown key(s) in {where}: {", ".join(unknown)}',
            hint=f'Valid keys: {", ".join(sorted(valid))}',
        )


def _string(raw: Mapping[str, Any], key: str, where: str, *, required: bool = False) -> str | None:
    value = raw.get(key)
    if value is None:
        if required:
            raise ConfigError(f'{where}.{key} is required')
        return None
    if not isinstance(value, str):
        raise ConfigError(f'{where}.{key} must be a string, got {type(value).__name__}')
    return value


def _parse_section(raw: object, index: int) -> SectionRule:
    where = f'changelog_sections[{index}]'
    if not isinstance(raw, Mapping):
        raise ConfigError(f'{where} must be a table')
    _check_keys(raw, _SECTION_KEYS, where)
    hidden = raw.get('hidden', False)
    if not isinstance(hidden, bool):
        raise ConfigError(f'{where}.hidden must be a boolean')
    return SectionRule(
        type=_string(raw, 'type', where, required=True) or '',
        section=_string(raw, 'section', where, required=True) or '',
        hidden=hidden,
    )


def _parse_manifest(raw: object, index: int) -> Manifest:
    where = f'manifests[{index}]'
    if not isinstance(raw, Mapping):
        raise ConfigError(f'{where} must be a table')
    _check_keys(raw, _MANIFEST_KEYS, where)
    path = _string(raw, 'path', where, required=True) or ''
    kind = _string(raw, 'kind', where) or 'json'
    if kind not in MANIFEST_KINDS:
        raise ConfigError(f'{where}.kind must be one of {", ".join(MANIFEST_KINDS)}, got {kind!r}')
    pattern = _string(raw, 'pattern', where)
    if pattern is not None and kind != 'regex':
        raise ConfigError(f'{where}.pattern is only valid for kind "regex"')
    try:
        splicer = splicer_for_kind(kind, pattern)
    except (re.error, ValueError) as exc:
        raise ConfigError(f'{where}.pattern: {exc}') from exc
    return Manifest(path=path, splicer=splicer, template=_string(raw, 'template', where))


def _parse_list(raw: Mapping[str, Any], key: str) -> list[object]:
    value = raw.get(key, [])
    if not isinstance(value, list):
        raise ConfigError(f'{key} must be a list of tables')
    return value


def parse_config(raw: Mapping[str, Any]) -> ReleasePlanOptions:
    """Validate a configuration mapping and build the options.

    Raises:
        ConfigError: For unknown keys, wrong types, or values that
            cannot produce a legal tag, title or version.
    """
    _check_keys(raw, _VALID_KEYS, 'releaseplanner config')

    values: dict[str, Any] = {}
    for key in sorted(_BOOL_KEYS & set(raw)):
        if not isinstance(raw[key], bool):
            raise ConfigError(f'{key} must be a boolean')
        values[key] = raw[key]
    for key in sorted(_STR_KEYS & set(raw)):
        if not isinstance(raw[key], str):
            raise ConfigError(f'{key} must be a string')
        values[key] = raw[key]

    separator = values.get('tag_separator')
    if separator is not None and separator not in SEPARATORS:
        raise ConfigError(f'tag_separator must be one of {SEPARATORS!r}, got {separator!r}')

    initial = values.get('initial_version')
    if initial is not None and Version.try_parse(initial) is None:
        raise ConfigError(f'initial_version is not a semantic version: {initial!r}')

    pattern = values.get('pull_request_title_pattern')
    if pattern is not None:
        try:
            validate_title_pattern(pattern)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

    component = values.get('component')
    if component is not None:
        try:
            TagName(
                _EXAMPLE_VERSION,
                component,
                separator if separator is not None else '-',
                values.get('include_v_in_tag', True),
            )
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

    if 'changelog_sections' in raw:
        values['changelog_sections'] = tuple(
            _parse_section(item, i) for i, item in enumerate(_parse_list(raw, 'changelog_sections'))
        )
    manifests = tuple(_parse_manifest(item, i) for i, item in enumerate(_parse_list(raw, 'manifests')))
    values['manifests'] = manifests

    seen = {values.get('changelog_path', 'CHANGELOG.md')}
    for manifest in manifests:
        if manifest.path in seen:
            raise ConfigError(f'duplicate file path: {manifest.path}')
        seen.add(manifest.path)

    return ReleasePlanOptions(**values)


def load_config(path: Path) -> ReleasePlanOptions:
    """Load options from a ``releaseplanner.toml`` or ``pyproject.toml``.

    For ``pyproject.toml`` the ``[tool.releaseplanner]`` table is used;
    a file without it yields the defaults.

    Raises:
        ConfigError: The file is missing, is not valid TOML, or holds
            invalid options.
    """
    try:
        with path.open('rb') as f:
            data = tomllib.load(f)
    except FileNotFoundError as exc:
        raise ConfigError(f'config file not found: {path}') from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f'invalid TOML in {path}: {exc}') from exc

    if path.name == 'pyproject.toml':
        data = data.get('tool', {}).get('releaseplanner', {})
        if not isinstance(data, Mapping):
            raise ConfigError('[tool.releaseplanner] must be a table')
    return parse_config(data)
