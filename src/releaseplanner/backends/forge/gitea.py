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

"""Gitea backend for releaseplanner.

The :class:`GiteaClient` implements the
:class:`~releaseplanner.backends.forge.Forge` protocol over the Gitea
REST API v1 using ``httpx.AsyncClient``.

Endpoints::

    GET   repos/{owner}/{repo}                        repository metadata
    GET   repos/{owner}/{repo}/tags?limit=N           newest tags
    GET   repos/{owner}/{repo}/commits?sha=B&limit=N  newest commits
    GET   repos/{owner}/{repo}/contents/{path}?ref=R  file content (404: None)
    POST  repos/{owner}/{repo}/contents/{path}        create file
    PUT   repos/{owner}/{repo}/contents/{path}        update file (needs sha)
    POST  repos/{owner}/{repo}/pulls                  open pull request
    POST  repos/{owner}/{repo}/tags                   create tag
    POST  repos/{owner}/{repo}/releases               publish release

Requests are never retried: a failed call raises
:class:`~releaseplanner.errors.ForgeAPIError` and the release flow stops.
"""

from __future__ import annotations

import base64
import re
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx

from releaseplanner._types import FileContent, PullRequestRef, RawCommit, ReleaseRef, RepositoryInfo, TagRef
from releaseplanner.backends.forge._decode import (
    decode_commits,
    decode_error,
    decode_file_content,
    decode_pull_request,
    decode_release,
    decode_repository,
    decode_tag,
    decode_tags,
    decode_write_revision,
)
from releaseplanner.errors import ForgeAPIError
from releaseplanner.logging import get_logger, register_secret

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

__all__ = [
    'DEFAULT_GITEA_API_URL',
    'GiteaClient',
    'normalize_api_base_url',
]

DEFAULT_GITEA_API_URL = 'https://gitea.com/api/v1/'

_API_VERSION_RE = re.compile(r'/api/v\d+(/.*)?$', re.IGNORECASE)
_API_RE = re.compile(r'/api$', re.IGNORECASE)


def normalize_api_base_url(server_url: str) -> str:
    """Turn a Gitea server URL into its REST API root.

    >>> normalize_api_base_url('https://gitea.example')
    'https://gitea.example/api/v1/'
    >>> normalize_api_base_url('https://gitea.example/api')
    'https://gitea.example/api/v1/'

    Raises:
        ValueError: For an empty URL.
    """
    trimmed = server_url.strip().rstrip('/')
    if not trimmed:
        raise ValueError('Server URL cannot be empty.')
    if _API_VERSION_RE.search(trimmed):
        return f'{trimmed}/'
    if _API_RE.search(trimmed):
        return f'{trimmed}/v1/'
    return f'{trimmed}/api/v1/'


def _encode_path(path: str) -> str:
    return '/'.join(quote(segment, safe='') for segment in path.split('/'))


class GiteaClient:
    """Gitea REST API client.

    Use as an async context manager, or call :meth:`aclose` when done::

        async with GiteaClient(owner='octo', repo='demo', token=token) as forge:
            snapshot = await capture_snapshot(forge, options)

    Args:
        owner: Repository owner (user or organization).
        repo: Repository name.
        token: API token, sent as ``Authorization: token <token>``.
        base_url: API root, see :func:`normalize_api_base_url`.
        client: An existing ``httpx.AsyncClient`` to use.  It is not
            closed by :meth:`aclose`.
        transport: Transport for the internally created client (tests
            pass an ``httpx.MockTransport``).
        timeout: Request timeout in seconds.
        log: Logger; defaults to ``releaseplanner.backends.forge.gitea``.
    """

    def __init__(
        self,
        *,
        owner: str,
        repo: str,
        token: str,
        base_url: str = DEFAULT_GITEA_API_URL,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 30.0,
        log: BoundLogger | None = None,
    ) -> None:
        """Initialize the client."""
        self.owner = owner
        self.repo = repo
        self.base_url = base_url if base_url.endswith('/') else f'{base_url}/'
        self._token = token
        register_secret(token)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(transport=transport, timeout=timeout)
        self._log = log or get_logger('releaseplanner.backends.forge.gitea')

    async def __aenter__(self) -> GiteaClient:
        """Enter the context."""
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        """Close the HTTP client."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the internally created HTTP client."""
        if self._owns_client:
            await self._client.aclose()

    def _url(self, path: str) -> str:
        return f'{self.base_url}repos/{quote(self.owner, safe="")}/{quote(self.repo, safe="")}{path}'

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
        accept: str = 'application/json',
    ) -> object:
        """Send one request and return the decoded JSON (or text) body.

        Returns ``None`` for 204 and empty bodies.

        Raises:
            ForgeAPIError: For any non-2xx response.
        """
        url = self._url(path)
        headers = {'Accept': accept, 'Authorization': f'token {self._token}'}
        self._log.debug('forge_request', method=method, url=url, has_body=body is not None)
        response = await self._client.request(method, url, params=params, json=body, headers=headers)
        if not response.is_success:
            message, error_body = decode_error(response.status_code, response.text)
            raise ForgeAPIError(
                message,
                status=response.status_code,
                method=method,
                url=str(response.request.url),
                body=error_body,
            )
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    async def get_repository(self) -> RepositoryInfo:
        """Return repository metadata."""
        payload = await self._request('GET', '')
        return decode_repository(payload, self.owner, self.repo)

    async def list_tags(self, limit: int) -> list[TagRef]:
        """Return up to *limit* tags, newest first."""
        return decode_tags(await self._request('GET', '/tags', params={'limit': limit}))

    async def list_commits(self, branch: str, limit: int) -> list[RawCommit]:
        """Return up to *limit* commits of *branch*, newest first."""
        return decode_commits(await self._request('GET', '/commits', params={'sha': branch, 'limit': limit}))

    async def get_file_content(self, path: str, ref: str) -> FileContent | None:
        """Return *path* at *ref*, or ``None`` on 404."""
        try:
            payload = await self._request(
                'GET',
                f'/contents/{_encode_path(path)}',
                params={'ref': ref} if ref else None,
                accept='application/vnd.gitea.object',
            )
        except ForgeAPIError as exc:
            if exc.status == 404:
                return None
            raise
        return decode_file_content(payload)

    async def create_or_update_file(
        self,
        path: str,
        content: str,
        message: str,
        *,
        revision: str | None = None,
        branch: str | None = None,
        new_branch: str | None = None,
    ) -> str:
        """Create *path*, or update it in place when *revision* is given."""
        body: dict[str, Any] = {
            'content': base64.b64encode(content.encode('utf-8')).decode('ascii'),
            'message': message,
        }
        if branch:
            body['branch'] = branch
        if new_branch:
            body['new_branch'] = new_branch
        if revision:
            body['sha'] = revision
        method = 'PUT' if revision else 'POST'
        payload = await self._request(method, f'/contents/{_encode_path(path)}', body=body)
        return decode_write_revision(payload)

    async def create_pull_request(self, title: str, body: str, head: str, base: str) -> PullRequestRef:
        """Open a pull request from *head* into *base*."""
        payload = await self._request(
            'POST',
            '/pulls',
            body={'title': title, 'body': body, 'head': head, 'base': base},
        )
        return decode_pull_request(payload)

    async def create_tag(self, name: str, target: str, *, message: str | None = None) -> TagRef:
        """Create tag *name* at *target*; the message defaults to the name."""
        payload = await self._request(
            'POST',
            '/tags',
            body={'tag_name': name, 'target': target, 'message': message or name},
        )
        tag = decode_tag(payload)
        return TagRef(name=tag.name or name, commit_sha=tag.commit_sha)

    async def create_release(
        self,
        tag_name: str,
        name: str,
        *,
        body: str = '',
        target: str | None = None,
        draft: bool = False,
        prerelease: bool = False,
    ) -> ReleaseRef:
        """Publish a release; *target* defaults to the repository default branch."""
        request: dict[str, Any] = {
            'tag_name': tag_name,
            'name': name,
            'body': body,
            'draft': draft,
            'prerelease': prerelease,
        }
        if target:
            request['target_commitish'] = target
        return decode_release(await self._request('POST', '/releases', body=request))
