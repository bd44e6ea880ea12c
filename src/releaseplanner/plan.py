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

"""Release plan assembly.

:func:`build_release_plan` is a pure function of a captured
:class:`~releaseplanner.snapshot.RepositorySnapshot`.  It runs in a
single pass::

    tag context ─► history walk ─► classify ─► bump ─► tag
        ─► changelog ─► file updates ─► title / body / branch

and returns one of two outcomes:

- :class:`Planned` wrapping an immutable :class:`ReleasePlan`, or
- :class:`NothingToRelease` when no commit since the last release
  warrants one.

"Nothing to release" is a value, not an exception.  Only genuine
failures (a missing boundary commit, broken manifests, invalid
options) raise.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal
from urllib.parse import urlparse

from releaseplanner.changelog import DEFAULT_SECTION_RULES, ChangelogContext, SectionRule, build_changelog_entry
from releaseplanner.commit_parsing import ParsedCommit, parse_commits
from releaseplanner.errors import BoundaryNotFoundError, ConfigError
from releaseplanner.history import walk_history
from releaseplanner.pull_request import branch_name, pull_request_body, pull_request_title
from releaseplanner.tag_name import TagName
from releaseplanner.updaters import FileUpdate, Manifest, stage_file_updates
from releaseplanner.versioning import VersioningPolicy, bump_version
from releaseplanner.versions import Version

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

    from releaseplanner._types import TagRef
    from releaseplanner.snapshot import RepositorySnapshot

__all__ = [
    'NothingToRelease',
    'PlanOutcome',
    'Planned',
    'ReleasePlan',
    'ReleasePlanOptions',
    'TagContext',
    'build_release_plan',
    'resolve_tag_context',
]


@dataclass(frozen=True)
class ReleasePlanOptions:
    """Knobs of one release flow.

    Attributes:
        target_branch: Branch to release from; the repository default
            branch when ``None``.
        component: Component name for tags and branch; a custom title
            pattern may also place it with ``${component}``.
        include_component_in_tag: When false, tags never carry a
            component even if one is configured.
        include_v_in_tag: ``v`` prefix policy; inherited from the
            previous tag (else ``True``) when ``None``.
        tag_separator: Component separator; inherited from the previous
            tag (else ``"-"``) when ``None``.
        bump_minor_pre_major: Below 1.0.0, breaking changes bump minor.
        bump_patch_for_minor_pre_major: Below 1.0.0, features bump patch.
        changelog_path: Path of the changelog file.
        changelog_host: Web root for changelog links; derived from the
            repository URL when ``None``.
        changelog_sections: Commit type to section mapping.
        pull_request_title_pattern: Custom title pattern.
        pull_request_header: Custom body header.
        pull_request_footer: Custom body footer.
        initial_version: Base version when there is no previous release.
        manifests: Version manifests updated next to the changelog.
    """

    target_branch: str | None = None
    component: str | None = None
    include_component_in_tag: bool = True
    include_v_in_tag: bool | None = None
    tag_separator: str | None = None
    bump_minor_pre_major: bool = False
    bump_patch_for_minor_pre_major: bool = False
    changelog_path: str = 'CHANGELOG.md'
    changelog_host: str | None = None
    changelog_sections: tuple[SectionRule, ...] = DEFAULT_SECTION_RULES
    pull_request_title_pattern: str | None = None
    pull_request_header: str | None = None
    pull_request_footer: str | None = None
    initial_version: str = '0.0.0'
    manifests: tuple[Manifest, ...] = ()

    @property
    def file_paths(self) -> tuple[str, ...]:
        """Every path a plan may update, changelog first."""
        paths = [self.changelog_path]
        for manifest in self.manifests:
            if manifest.path not in paths:
                paths.append(manifest.path)
        return tuple(paths)

    @property
    def policy(self) -> VersioningPolicy:
        """Pre-1.0 bump policy."""
        return VersioningPolicy(
            bump_minor_pre_major=self.bump_minor_pre_major,
            bump_patch_for_minor_pre_major=self.bump_patch_for_minor_pre_major,
        )


@dataclass(frozen=True)
class ReleasePlan:
    """Everything needed to open or refresh one release pull request."""

    version: Version
    previous_tag: str | None
    current_tag: str
    changelog_entry: str
    pull_request_title: str
    pull_request_body: str
    head_branch: str
    updates: tuple[FileUpdate, ...]
    commits: tuple[ParsedCommit, ...]


@dataclass(frozen=True)
class Planned:
    """A release is due."""

    plan: ReleasePlan


NothingReason = Literal['no_conventional_commits', 'no_releasable_changes']


@dataclass(frozen=True)
class NothingToRelease:
    """No release is due.

    Attributes:
        reason: ``'no_conventional_commits'`` when no commit since the
            previous release parsed, ``'no_releasable_changes'`` when
            some parsed but none is a feature, fix or breaking change.
        previous_tag: The previous release tag, if any.
        commit_count: Number of commits since the previous release.
    """

    reason: NothingReason
    previous_tag: str | None
    commit_count: int


PlanOutcome = Planned | NothingToRelease


@dataclass(frozen=True)
class TagContext:
    """The previous release tag plus the naming policy for the next one."""

    previous: TagName | None
    previous_name: str | None
    previous_sha: str | None
    component: str | None
    separator: str
    include_v: bool


def resolve_tag_context(
    tags: tuple[TagRef, ...] | list[TagRef],
    options: ReleasePlanOptions,
    *,
    log: BoundLogger,
) -> TagContext:
    """Pick the previous release tag and the tag naming policy.

    Only the newest tag is considered.  A tag that does not parse, or
    that belongs to another component, means an initial release.
    """
    previous: TagName | None = None
    ref = tags[0] if tags else None
    if ref is None:
        log.info('no_previous_tag')
    else:
        previous = TagName.parse(ref.name)
        if previous is None:
            log.warning('tag_unparseable', tag=ref.name)
        elif options.component and previous.component and previous.component != options.component:
            log.debug('tag_component_mismatch', tag=ref.name, component=options.component)
            previous = None

    if not options.include_component_in_tag:
        component = None
    else:
        component = options.component or (previous.component if previous else None)

    if options.tag_separator is not None:
        separator = options.tag_separator
    elif previous is not None and previous.component:
        separator = previous.separator
    else:
        separator = '-'

    if options.include_v_in_tag is not None:
        include_v = options.include_v_in_tag
    else:
        include_v = previous.include_v if previous is not None else True

    return TagContext(
        previous=previous,
        previous_name=ref.name if previous is not None and ref is not None else None,
        previous_sha=ref.commit_sha if previous is not None and ref is not None else None,
        component=component,
        separator=separator,
        include_v=include_v,
    )


def _changelog_host(options: ReleasePlanOptions, html_url: str) -> str | None:
    if options.changelog_host:
        return options.changelog_host
    parsed = urlparse(html_url)
    if not parsed.scheme or not parsed.netloc:
        return None
    return f'{parsed.scheme}://{parsed.netloc}'


def build_release_plan(
    snapshot: RepositorySnapshot,
    options: ReleasePlanOptions,
    *,
    log: BoundLogger,
) -> PlanOutcome:
    """Compute the release plan for *snapshot*.

    Args:
        snapshot: Repository state captured in one pass.
        options: Release flow options.
        log: Logger for plan events.

    Returns:
        :class:`Planned` or :class:`NothingToRelease`.

    Raises:
        BoundaryNotFoundError: The previous tag's commit is not in the
            snapshot's history window.
        ConfigError: Options produce an illegal tag or version.
        ManifestError: A manifest cannot be rewritten.
    """
    ctx = resolve_tag_context(snapshot.tags, options, log=log)
    previous_tag = str(ctx.previous) if ctx.previous is not None else None

    if ctx.previous is not None:
        if ctx.previous_sha is None:
            raise BoundaryNotFoundError(ctx.previous_name or previous_tag or '', None)
        window = walk_history(snapshot.commits, ctx.previous_sha, tag=ctx.previous_name or '')
    else:
        window = walk_history(snapshot.commits, None)

    commits = tuple(parse_commits(window, log=log))
    if not commits:
        log.info('nothing_to_release', reason='no_conventional_commits', commits=len(window))
        return NothingToRelease('no_conventional_commits', previous_tag, len(window))

    if ctx.previous is not None:
        current = ctx.previous.version
    else:
        try:
            current = Version.parse(options.initial_version)
        except ValueError as exc:
            raise ConfigError(f'initial_version: {exc}') from exc

    version = bump_version(current, commits, options.policy)
    if version is None:
        log.info('nothing_to_release', reason='no_releasable_changes', commits=len(window))
        return NothingToRelease('no_releasable_changes', previous_tag, len(window))

    try:
        tag = TagName(version, ctx.component, ctx.separator, ctx.include_v)
        title = pull_request_title(
            snapshot.target_branch,
            str(version),
            component=options.component if options.pull_request_title_pattern else None,
            pattern=options.pull_request_title_pattern,
        )
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc

    repository = snapshot.repository
    entry = build_changelog_entry(
        commits,
        ChangelogContext(
            version=str(version),
            current_tag=str(tag),
            previous_tag=previous_tag,
            release_date=snapshot.release_date,
            host=_changelog_host(options, repository.html_url),
            owner=repository.owner,
            repo=repository.repo,
        ),
        options.changelog_sections,
    )
    updates = stage_file_updates(
        snapshot.files,
        changelog_path=options.changelog_path,
        changelog_entry=entry,
        version=version,
        manifests=options.manifests,
        message=title,
        log=log,
    )

    plan = ReleasePlan(
        version=version,
        previous_tag=previous_tag,
        current_tag=str(tag),
        changelog_entry=entry,
        pull_request_title=title,
        pull_request_body=pull_request_body(
            entry,
            header=options.pull_request_header,
            footer=options.pull_request_footer,
        ),
        head_branch=branch_name(snapshot.target_branch, options.component),
        updates=updates,
        commits=commits,
    )
    log.info(
        'release_planned',
        version=str(version),
        previous_tag=previous_tag,
        tag=plan.current_tag,
        commits=len(commits),
        updates=len(updates),
    )
    return Planned(plan)
