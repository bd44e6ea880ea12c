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

"""Structured logging for releaseplanner.

Configures `structlog <https://www.structlog.org/>`_ on top of the
standard library root logger.  Output goes to stderr, either as
human-readable console lines or as one JSON object per line
(``json_log=True``) for CI log collectors.

Forge tokens never reach the output: the :func:`redact_sensitive_values`
processor replaces the values of well-known token environment
variables, and any value passed to :func:`register_secret`, with
``[REDACTED]``.

The planning engine does not call :func:`get_logger` on its own; the
caller hands a logger to :func:`releaseplanner.plan.build_release_plan`.

Usage::

    from releaseplanner.logging import configure_logging, get_logger

    configure_logging(verbose=True)
    log = get_logger()
    log.info('plan_built', version='1.3.0')
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

__all__ = [
    'configure_logging',
    'get_logger',
    'redact_sensitive_values',
    'register_secret',
]

# Env vars whose runtime values must never appear in logs.
_SENSITIVE_ENV_VARS: tuple[str, ...] = (
    'GITEA_TOKEN',
    'GITHUB_TOKEN',
    'GH_TOKEN',
    'GITLAB_TOKEN',
    'INPUT_TOKEN',
)

_REDACTED = '[REDACTED]'

# Short values would redact ordinary words.
_MIN_SECRET_LENGTH = 8

_env_secrets: frozenset[str] = frozenset()
_registered_secrets: set[str] = set()
_redaction_enabled: bool = True


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    json_log: bool = False,
    redact_secrets: bool = True,
) -> None:
    """Configure structlog for releaseplanner.

    Safe to call more than once; the last call wins.

    Args:
        verbose: Enable debug-level output.
        quiet: Only warnings and errors.
        json_log: Render JSON lines instead of console output.
        redact_secrets: Scrub token values from every event.  The
            ``RELEASEPLANNER_REDACT_SECRETS=0`` env var also disables it.
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(format='%(message)s', stream=sys.stderr, level=level, force=True)

    global _env_secrets, _redaction_enabled  # noqa: PLW0603
    _redaction_enabled = redact_secrets and os.environ.get('RELEASEPLANNER_REDACT_SECRETS', '1') != '0'
    _env_secrets = _collect_env_secrets() if _redaction_enabled else frozenset()

    shared_processors: list[structlog.types.Processor] = [  # type: ignore[assignment]
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        redact_sensitive_values,
    ]

    if json_log:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*shared_processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )
    for handler in logging.root.handlers:
        handler.setFormatter(formatter)


def get_logger(name: str = 'releaseplanner') -> structlog.stdlib.BoundLogger:
    """Return a bound structlog logger named *name*."""
    return structlog.get_logger(name)


def register_secret(value: str) -> None:
    """Add *value* to the set of strings scrubbed from log output.

    Used for credentials that do not come from the environment, such as
    a token passed directly to a forge client.
    """
    if len(value) >= _MIN_SECRET_LENGTH:
        _registered_secrets.add(value)


def _collect_env_secrets() -> frozenset[str]:
    """Collect non-empty runtime values of the sensitive env vars."""
    return frozenset(v for v in (os.environ.get(name, '') for name in _SENSITIVE_ENV_VARS) if v)


def _secrets() -> frozenset[str]:
    if not _redaction_enabled:
        return frozenset()
    return _env_secrets | _registered_secrets


def _scrub(value: object, secrets: frozenset[str]) -> object:
    """Replace any secret substring of a string value with ``[REDACTED]``."""
    if not isinstance(value, str):
        return value
    result = value
    for secret in secrets:
        if len(secret) >= _MIN_SECRET_LENGTH and secret in result:
            result = result.replace(secret, _REDACTED)
    return result


def redact_sensitive_values(
    logger: Any,  # noqa: ANN401
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Structlog processor: scrub token values from all event fields."""
    secrets = _secrets()
    if not secrets:
        return event_dict
    return {k: _scrub(v, secrets) for k, v in event_dict.items()}
