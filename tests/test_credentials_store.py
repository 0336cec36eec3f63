"""Tests for the keyring-based token store."""

import unittest
from unittest import mock

from hcptf.internal.credentials_store import SERVICE_NAME, clear_token, load_token, save_token


def _mock_keyring(get_password=None, set_password=None, delete_password=None):
    """Return a mock keyring module wired to the given side effects / return values."""
    kr = mock.MagicMock()
    kr.get_password.return_value = get_password
    if set_password is not None:
        kr.set_password.side_effect = set_password
    if delete_password is not None:
        kr.delete_password.side_effect = delete_password
    return kr


class LoadTokenTest(unittest.TestCase):
    def test_no_keyring_returns_none(self):
        with mock.patch("hcptf.internal.credentials_store._get_keyring", return_value=None):
            self.assertIsNone(load_token("app.terraform.io"))

    def test_not_stored_returns_none(self):
        kr = _mock_keyring(get_password=None)
        with mock.patch("hcptf.internal.credentials_store._get_keyring", return_value=kr):
            self.assertIsNone(load_token("app.terraform.io"))
        kr.get_password.assert_called_once_with(SERVICE_NAME, "app.terraform.io")

    def test_stored_token_returned(self):
        kr = _mock_keyring(get_password="tok-123")
        with mock.patch("hcptf.internal.credentials_store._get_keyring", return_value=kr):
            self.assertEqual(load_token("tfe.example.com"), "tok-123")
        kr.get_password.assert_called_once_with(SERVICE_NAME, "tfe.example.com")

    def test_keyring_error_returns_none(self):
        kr = mock.MagicMock()
        kr.get_password.side_effect = Exception("locked")
        with mock.patch("hcptf.internal.credentials_store._get_keyring", return_value=kr):
            self.assertIsNone(load_token("app.terraform.io"))


class SaveTokenTest(unittest.TestCase):
    def test_saves_under_hostname(self):
        kr = _mock_keyring()
        with mock.patch("hcptf.internal.credentials_store._get_keyring", return_value=kr):
            save_token("app.terraform.io", "tok-abc")
        kr.set_password.assert_called_once_with(SERVICE_NAME, "app.terraform.io", "tok-abc")

    def test_no_keyring_raises(self):
        with mock.patch("hcptf.internal.credentials_store._get_keyring", return_value=None):
            with self.assertRaises(RuntimeError):
                save_token("app.terraform.io", "tok-abc")


class ClearTokenTest(unittest.TestCase):
    def test_clears_hostname(self):
        kr = _mock_keyring()
        with mock.patch("hcptf.internal.credentials_store._get_keyring", return_value=kr):
            clear_token("app.terraform.io")
        kr.delete_password.assert_called_once_with(SERVICE_NAME, "app.terraform.io")

    def test_no_keyring_is_silent(self):
        with mock.patch("hcptf.internal.credentials_store._get_keyring", return_value=None):
            clear_token("app.terraform.io")

    def test_delete_error_is_silent(self):
        kr = _mock_keyring(delete_password=Exception("not found"))
        with mock.patch("hcptf.internal.credentials_store._get_keyring", return_value=kr):
            clear_token("app.terraform.io")


class GetKeyringTest(unittest.TestCase):
    def test_fail_backend_is_unusable(self):
        from hcptf.internal.credentials_store import _get_keyring

        class FailKeyring:
            pass

        with mock.patch("keyring.get_keyring", return_value=FailKeyring()):
            self.assertIsNone(_get_keyring())


if __name__ == "__main__":
    unittest.main()
