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

"""Human-readable summary of a plan outcome."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from releaseplanner.plan import NothingToRelease, PlanOutcome

__all__ = [
    'render_plan',
]

_REASONS: dict[str, str] = {
    'no_conventional_commits': 'no conventional commits',
    'no_releasable_changes': 'no feature, fix or breaking change',
}


def render_plan(outcome: PlanOutcome, console: Console | None = None) -> None:
    """Print *outcome* to *console*.

    Args:
        outcome: Result of :func:`~releaseplanner.plan.build_release_plan`.
        console: Rich :class:`Console` to print to.  When ``None``,
            a default ``Console()`` is created (auto-detects TTY).
    """
    if console is None:
        console = Console()

    if isinstance(outcome, NothingToRelease):
        since = f' since {escape(outcome.previous_tag)}' if outcome.previous_tag else ''
        reason = _REASONS.get(outcome.reason, outcome.reason)
        console.print(f'[bold]Nothing to release[/]{since}: {reason} ({outcome.commit_count} commit(s)).')
        return

    plan = outcome.plan
    summary = Table(show_header=False, show_edge=False, pad_edge=False, box=None)
    summary.add_column('Field', style='bold')
    summary.add_column('Value')
    summary.add_row('Version', Text(str(plan.version), style='green'))
    summary.add_row('Previous tag', plan.previous_tag or Text('(none)', style='dim'))
    summary.add_row('Tag', plan.current_tag)
    summary.add_row('Branch', plan.head_branch)
    summary.add_row('Title', plan.pull_request_title)
    summary.add_row('Commits', str(len(plan.commits)))
    console.print(summary)

    updates = Table(show_header=True, header_style='bold', show_edge=False, pad_edge=False)
    updates.add_column('Path', min_width=20)
    updates.add_column('Action', width=8)
    for update in plan.updates:
        action = Text('create', style='yellow') if update.creates else Text('update', style='cyan')
        updates.add_row(update.path, action)
    console.print()
    console.print(updates)
