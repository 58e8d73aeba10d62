"""
Unit tests for notifications/email_config.py

Tests usability rules, transport precedence (admin pair vs environment),
sender precedence, template selection and failure tolerance.
"""

import unittest
from unittest.mock import Mock

from models.content import ContentType
from models.email_settings import EmailSettings
from notifications.email_config import (
    EMAIL_SETTINGS_SLUG,
    build_transport_descriptor,
    is_smtp_configured,
    load_email_settings,
    resolve_email_config,
    resolve_sender,
)
from tests.fixtures.content_factory import (
    create_test_email_settings,
    create_test_mail_config,
)
from tests.fixtures.mock_helpers import InMemoryPageStore


def _settings(**overrides) -> EmailSettings:
    return EmailSettings.from_page_content(create_test_email_settings(**overrides))


class TestIsSmtpConfigured(unittest.TestCase):
    """Tests for is_smtp_configured()."""

    def test_admin_pair_is_enough(self):
        env = create_test_mail_config(smtp_host="", smtp_user="", smtp_pass="")

        self.assertTrue(is_smtp_configured(_settings(smtpHost=None), env))

    def test_env_triple_is_enough(self):
        self.assertTrue(is_smtp_configured(None, create_test_mail_config()))

    def test_env_missing_host_not_usable(self):
        env = create_test_mail_config(smtp_host="")

        self.assertFalse(is_smtp_configured(None, env))

    def test_admin_password_only_not_merged_with_env(self):
        """A lone admin password does not complete a partial env config."""
        env = create_test_mail_config(smtp_user="")
        settings = _settings(smtpUser="", smtpPass="admin-secret")

        self.assertFalse(is_smtp_configured(settings, env))

    def test_whitespace_password_not_usable(self):
        env = create_test_mail_config(smtp_pass="")
        settings = _settings(smtpPass="   ")

        self.assertFalse(is_smtp_configured(settings, env))


class TestBuildTransportDescriptor(unittest.TestCase):
    """Tests for build_transport_descriptor()."""

    def test_admin_settings_win_when_pair_complete(self):
        descriptor = build_transport_descriptor(_settings(), create_test_mail_config())

        self.assertEqual(descriptor.host, "smtp.admin.example")
        self.assertEqual(descriptor.port, 465)
        self.assertTrue(descriptor.secure)
        self.assertEqual(descriptor.user, "admin@chaichapter.example")
        self.assertEqual(descriptor.secret, "admin-secret")

    def test_unset_admin_fields_fall_back_individually(self):
        settings = EmailSettings.from_page_content(
            {"smtpUser": "admin", "smtpPass": "pw"}
        )
        env = create_test_mail_config(smtp_port=2525, smtp_secure=True)

        descriptor = build_transport_descriptor(settings, env)

        self.assertEqual(descriptor.host, "smtp.env.example")
        self.assertEqual(descriptor.port, 2525)
        self.assertTrue(descriptor.secure)
        self.assertEqual((descriptor.user, descriptor.secret), ("admin", "pw"))

    def test_incomplete_admin_pair_uses_env_wholesale(self):
        settings = _settings(smtpPass="")
        descriptor = build_transport_descriptor(settings, create_test_mail_config())

        self.assertEqual(descriptor.host, "smtp.env.example")
        self.assertEqual(descriptor.port, 587)
        self.assertFalse(descriptor.secure)
        self.assertEqual((descriptor.user, descriptor.secret), ("env-user", "env-secret"))

    def test_no_settings_uses_env(self):
        descriptor = build_transport_descriptor(None, create_test_mail_config())

        self.assertEqual(descriptor.user, "env-user")


class TestResolveSender(unittest.TestCase):
    """Tests for resolve_sender()."""

    def test_admin_from_first(self):
        self.assertEqual(
            resolve_sender(_settings(), create_test_mail_config()),
            "hello@chaichapter.example",
        )

    def test_admin_user_second(self):
        self.assertEqual(
            resolve_sender(_settings(fromEmail="  "), create_test_mail_config()),
            "admin@chaichapter.example",
        )

    def test_admin_user_used_even_without_password(self):
        settings = _settings(fromEmail=None, smtpPass=None)

        self.assertEqual(
            resolve_sender(settings, create_test_mail_config()),
            "admin@chaichapter.example",
        )

    def test_env_from_last(self):
        self.assertEqual(
            resolve_sender(None, create_test_mail_config()),
            "env-from@chaichapter.example",
        )


class TestResolveEmailConfig(unittest.TestCase):
    """Tests for resolve_email_config()."""

    def test_templates_for_matching_type(self):
        settings = _settings(
            musingsAnnounceSubject="New: {{title}}",
            musingsAnnounceBodyHtml="<p>{{title}}</p>",
            blogAnnounceSubject="Blog: {{title}}",
        )

        resolved = resolve_email_config(
            settings, create_test_mail_config(), ContentType.MUSINGS
        )

        self.assertTrue(resolved.usable)
        self.assertEqual(resolved.subject_template, "New: {{title}}")
        self.assertEqual(resolved.body_template, "<p>{{title}}</p>")

    def test_blank_templates_are_none(self):
        settings = _settings(blogAnnounceBodyHtml="   ")

        resolved = resolve_email_config(settings, create_test_mail_config(), ContentType.BLOG)

        self.assertIsNone(resolved.subject_template)
        self.assertIsNone(resolved.body_template)

    def test_not_usable_reported_without_raising(self):
        env = create_test_mail_config(smtp_host="", smtp_user="", smtp_pass="")

        resolved = resolve_email_config(None, env, ContentType.BLOG)

        self.assertFalse(resolved.usable)

    def test_secret_hidden_from_repr(self):
        resolved = resolve_email_config(_settings(), create_test_mail_config())

        self.assertNotIn("admin-secret", repr(resolved.transport))


class TestLoadEmailSettings(unittest.TestCase):
    """Tests for load_email_settings()."""

    def test_reads_email_settings_page(self):
        store = InMemoryPageStore({EMAIL_SETTINGS_SLUG: create_test_email_settings()})

        settings = load_email_settings(store)

        self.assertEqual(settings.smtp_host, "smtp.admin.example")
        self.assertEqual(store.reads, ["email-settings"])

    def test_missing_page(self):
        self.assertIsNone(load_email_settings(InMemoryPageStore()))

    def test_store_failure_means_no_settings(self):
        store = Mock()
        store.read.side_effect = ConnectionError("database down")

        self.assertIsNone(load_email_settings(store))


if __name__ == "__main__":
    unittest.main()
