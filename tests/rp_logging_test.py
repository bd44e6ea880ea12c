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

"""Tests for releaseplanner.logging module."""

from __future__ import annotations

import logging
from unittest.mock import patch

import releaseplanner.logging as rl
from releaseplanner.logging import (
    _REDACTED,
    _collect_env_secrets,
    _scrub,
    configure_logging,
    get_logger,
    redact_sensitive_values,
    register_secret,
)


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_default_level_is_info(self) -> None:
        """Default logging level should be INFO."""
        configure_logging()
        assert logging.root.level == logging.INFO

    def test_verbose_sets_debug(self) -> None:
        """Verbose flag should set DEBUG level."""
        configure_logging(verbose=True)
        assert logging.root.level == logging.DEBUG

    def test_quiet_sets_warning(self) -> None:
        """Quiet flag should set WARNING level."""
        configure_logging(quiet=True)
        assert logging.root.level == logging.WARNING

    def test_json_log_does_not_crash(self) -> None:
        """JSON log mode should configure without errors."""
        configure_logging(json_log=True)
        log = get_logger()
        log.info('test_json', key='value')

    def test_logger_can_log(self) -> None:
        """Logger should emit events without crashing."""
        configure_logging(quiet=True)
        log = get_logger('releaseplanner.test')
        log.info('plan_built', version='1.3.0')
        log.debug('debug_event')
        log.warning('tag_unparseable', tag='nightly')


class TestRedactSensitiveValues:
    """Tests for the structlog redaction processor."""

    def test_redacts_env_secret(self) -> None:
        """Env token values in events are replaced with [REDACTED]."""
        with patch.dict('os.environ', {'GITEA_TOKEN': 'gitea-token-value-1'}, clear=False):
            configure_logging(quiet=True)
            result = redact_sensitive_values(
                None,
                'info',
                {'event': 'auth with gitea-token-value-1', 'level': 'info'},
            )
        assert result['event'] == f'auth with {_REDACTED}'
        assert result['level'] == 'info'

    def test_redacts_registered_secret(self) -> None:
        """Values passed to register_secret() are redacted."""
        configure_logging(quiet=True)
        old = set(rl._registered_secrets)
        try:
            register_secret('registered-token-42')
            result = redact_sensitive_values(None, 'debug', {'event': 'x', 'header': 'token registered-token-42'})
            assert result['header'] == f'token {_REDACTED}'
        finally:
            rl._registered_secrets.clear()
            rl._registered_secrets.update(old)

    def test_short_secret_not_registered(self) -> None:
        """Secrets shorter than 8 chars are ignored to prevent over-redaction."""
        old = set(rl._registered_secrets)
        try:
            register_secret('abc')
            assert 'abc' not in rl._registered_secrets
        finally:
            rl._registered_secrets.clear()
            rl._registered_secrets.update(old)

    def test_noop_when_no_secrets(self) -> None:
        """Processor returns the same dict when nothing is secret."""
        with patch.dict('os.environ', {}, clear=True):
            configure_logging(quiet=True)
            old = set(rl._registered_secrets)
            rl._registered_secrets.clear()
            try:
                event = {'event': 'hello', 'data': 'world'}
                assert redact_sensitive_values(None, 'info', event) is event
            finally:
                rl._registered_secrets.update(old)

    def test_scrub_passes_non_strings(self) -> None:
        """_scrub leaves non-string values untouched."""
        secrets = frozenset({'secret-value-123'})
        assert _scrub(42, secrets) == 42
        assert _scrub(None, secrets) is None
        assert _scrub(True, secrets) is True

    def test_scrub_skips_short_secrets(self) -> None:
        """_scrub ignores secrets shorter than 8 characters."""
        assert _scrub('token is abc', frozenset({'abc'})) == 'token is abc'


class TestCollectEnvSecrets:
    """Tests for _collect_env_secrets()."""

    def test_collects_set_env_vars(self) -> None:
        """Env vars that are set are included."""
        with patch.dict('os.environ', {'GITHUB_TOKEN': 'ghp-test-123'}, clear=False):
            assert 'ghp-test-123' in _collect_env_secrets()

    def test_ignores_empty_env_vars(self) -> None:
        """Empty env vars are not included."""
        with patch.dict('os.environ', {'GITEA_TOKEN': ''}, clear=True):
            assert _collect_env_secrets() == frozenset()


class TestRedactionConfig:
    """Tests for redaction configurability."""

    def test_redact_secrets_false_disables_redaction(self) -> None:
        """redact_secrets=False leaves the env secret set empty."""
        with patch.dict('os.environ', {'GITEA_TOKEN': 'my-gitea-key'}, clear=False):
            configure_logging(quiet=True, redact_secrets=False)
            assert rl._env_secrets == frozenset()
            assert rl._redaction_enabled is False
        configure_logging(quiet=True)

    def test_env_var_override_disables_redaction(self) -> None:
        """RELEASEPLANNER_REDACT_SECRETS=0 disables redaction even if requested."""
        env = {'GITEA_TOKEN': 'my-gitea-key', 'RELEASEPLANNER_REDACT_SECRETS': '0'}
        with patch.dict('os.environ', env, clear=False):
            configure_logging(quiet=True, redact_secrets=True)
            assert rl._redaction_enabled is False
            result = redact_sensitive_values(None, 'info', {'event': 'my-gitea-key'})
            assert result['event'] == 'my-gitea-key'
        configure_logging(quiet=True)

    def test_env_var_1_keeps_redaction_enabled(self) -> None:
        """RELEASEPLANNER_REDACT_SECRETS=1 keeps redaction on."""
        env = {'GITEA_TOKEN': 'my-gitea-key', 'RELEASEPLANNER_REDACT_SECRETS': '1'}
        with patch.dict('os.environ', env, clear=False):
            configure_logging(quiet=True, redact_secrets=True)
            assert 'my-gitea-key' in rl._env_secrets
            assert rl._redaction_enabled is True
