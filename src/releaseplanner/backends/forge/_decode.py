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

"""Decoding of raw forge REST payloads into releaseplanner types.

Every field of a forge response is treated as optional.  Defaults are
applied here and nowhere else:

    ┌────────────────────────┬──────────────────────────────────────────┐
    │ Field                  │ Source, in order of preference           │
    ├────────────────────────┼──────────────────────────────────────────┤
    │ default branch         │ default_branch, else "main"              │
    │ repository web URL     │ html_url, website, else ""               │
    │ commit message         │ commit.message, message, else ""         │
    │ commit parents         │ parents[].sha (or plain strings), else []│
    │ tag commit             │ commit.sha, sha, target, else None       │
    │ file content           │ content decoded per encoding (base64)    │
    │ file revision          │ sha, else ""                             │
    └────────────────────────┴──────────────────────────────────────────┘
"""

from __future__ import annotations

import base64
import binascii
import json
from collections.abc import Mapping
from typing import Any

from releaseplanner._types import FileContent, PullRequestRef, RawCommit, ReleaseRef, RepositoryInfo, TagRef

__all__ = [
    'decode_commit',
    'decode_commits',
    'decode_error',
    'decode_file_content',
    'decode_pull_request',
    'decode_release',
    'decode_repository',
    'decode_tag',
    'decode_tags',
    'decode_write_revision',
]

_DEFAULT_BRANCH = 'main'


def _obj(value: object) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _str(value: object) -> str | None:
    return value if isinstance(value, str) and value else None


def _list(value: object) -> list[Any]:
    return value if isinstance(value, list) else []


def decode_repository(payload: object, owner: str, repo: str) -> RepositoryInfo:
    """Decode ``GET /repos/{owner}/{repo}``."""
    data = _obj(payload)
    return RepositoryInfo(
        owner=owner,
        repo=repo,
        default_branch=_str(data.get('default_branch')) or _DEFAULT_BRANCH,
        html_url=_str(data.get('html_url')) or _str(data.get('website')) or '',
    )


def decode_commit(payload: object) -> RawCommit:
    """Decode one entry of ``GET /repos/{owner}/{repo}/commits``."""
    data = _obj(payload)
    message = _str(_obj(data.get('commit')).get('message')) or _str(data.get('message')) or ''
    parents: list[str] = []
    for parent in _list(data.get('parents')):
        sha = parent if isinstance(parent, str) else _str(_obj(parent).get('sha'))
        if sha:
            parents.append(sha)
    return RawCommit(sha=_str(data.get('sha')) or '', message=message, parents=tuple(parents))


def decode_commits(payload: object) -> list[RawCommit]:
    """Decode a commit listing, keeping the forge's (newest first) order."""
    return [decode_commit(item) for item in _list(payload)]


def decode_tag(payload: object) -> TagRef:
    """Decode one entry of ``GET /repos/{owner}/{repo}/tags``."""
    data = _obj(payload)
    sha = _str(_obj(data.get('commit')).get('sha')) or _str(data.get('sha')) or _str(data.get('target'))
    return TagRef(name=_str(data.get('name')) or '', commit_sha=sha)


def decode_tags(payload: object) -> list[TagRef]:
    """Decode a tag listing, dropping entries without a name."""
    return [tag for tag in (decode_tag(item) for item in _list(payload)) if tag.name]


def decode_file_content(payload: object) -> FileContent:
    """Decode ``GET /repos/{owner}/{repo}/contents/{path}``.

    Raises:
        ValueError: The content is not valid for its declared encoding
            or is not UTF-8 text.
    """
    data = _obj(payload)
    raw = data.get('content')
    encoding = _str(data.get('encoding')) or 'base64'
    text = raw if isinstance(raw, str) else ''
    if encoding == 'base64':
        try:
            text = base64.b64decode(text).decode('utf-8')
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise ValueError(f'cannot decode file content: {exc}') from exc
    return FileContent(content=text, revision=_str(data.get('sha')) or '')


def decode_write_revision(payload: object) -> str:
    """Return the new revision marker from a file create/update response."""
    data = _obj(payload)
    return _str(_obj(data.get('content')).get('sha')) or _str(data.get('sha')) or ''


def decode_pull_request(payload: object) -> PullRequestRef:
    """Decode ``POST /repos/{owner}/{repo}/pulls``."""
    data = _obj(payload)
    number = data.get('number')
    return PullRequestRef(
        number=number if isinstance(number, int) else 0,
        url=_str(data.get('html_url')) or _str(data.get('url')) or '',
    )


def decode_release(payload: object) -> ReleaseRef:
    """Decode ``POST /repos/{owner}/{repo}/releases``."""
    data = _obj(payload)
    release_id = data.get('id')
    return ReleaseRef(
        id=release_id if isinstance(release_id, int) else 0,
        tag_name=_str(data.get('tag_name')) or '',
        url=_str(data.get('html_url')) or _str(data.get('url')) or '',
    )


def decode_error(status: int, text: str) -> tuple[str, object]:
    """Return ``(message, body)`` for a failed response.

    The body is the parsed JSON value when the text is JSON, the raw
    text otherwise, or ``None`` when empty.
    """
    body: object = None
    if text:
        try:
            body = json.loads(text)
        except ValueError:
            body = text
    if isinstance(body, str):
        return body, body
    message = _str(_obj(body).get('message'))
    return message or f'Request failed with status {status}', body
