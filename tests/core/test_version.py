"""Tests for version and VCS revision detection."""

import json
import unittest
from importlib import metadata
from unittest import mock

from lbq.core.version import _get_pep610_revision, format_version_string, get_version_info


class VersionDetectionTests(unittest.TestCase):
    """Test version detection in __init__.py."""

    def test_version_attribute_exists(self) -> None:
        """Test that __version__ attribute exists and is a string."""
        import lbq

        self.assertTrue(hasattr(lbq, "__version__"))
        self.assertIsInstance(lbq.__version__, str)
        self.assertNotEqual(lbq.__version__, "")

    def test_get_version_info_uses_package_version(self) -> None:
        import lbq

        with mock.patch("lbq.core.version._get_pep610_revision", return_value=None):
            self.assertEqual(get_version_info(), (lbq.__version__, None))


class Pep610Tests(unittest.TestCase):
    """Test PEP 610 direct_url.json parsing."""

    def _dist(self, direct_url: str | None) -> mock.MagicMock:
        dist = mock.MagicMock()
        dist.read_text.return_value = direct_url
        return dist

    def test_requested_revision_preferred(self) -> None:
        data = {"url": "https://x", "vcs_info": {"requested_revision": " main ", "commit_id": "abc"}}
        with mock.patch.object(metadata, "distribution", return_value=self._dist(json.dumps(data))):
            self.assertEqual(_get_pep610_revision(), "main")

    def test_commit_id_fallback(self) -> None:
        data = {"url": "https://x", "vcs_info": {"commit_id": "abc123"}}
        with mock.patch.object(metadata, "distribution", return_value=self._dist(json.dumps(data))):
            self.assertEqual(_get_pep610_revision(), "abc123")

    def test_no_vcs_info(self) -> None:
        data = {"url": "file:///src/lbq", "dir_info": {"editable": True}}
        with mock.patch.object(metadata, "distribution", return_value=self._dist(json.dumps(data))):
            self.assertIsNone(_get_pep610_revision())

    def test_missing_or_invalid_metadata(self) -> None:
        for direct_url in (None, "", "{not json"):
            with self.subTest(direct_url=direct_url):
                with mock.patch.object(
                    metadata, "distribution", return_value=self._dist(direct_url)
                ):
                    self.assertIsNone(_get_pep610_revision())

    def test_package_not_installed(self) -> None:
        with mock.patch.object(
            metadata, "distribution", side_effect=metadata.PackageNotFoundError("lbq")
        ):
            self.assertIsNone(_get_pep610_revision())


class FormatVersionStringTests(unittest.TestCase):
    def test_version_only(self) -> None:
        self.assertEqual(format_version_string("0.4.0", None), "0.4.0\nLicense: Apache-2.0")

    def test_with_revision(self) -> None:
        self.assertEqual(
            format_version_string("0.4.0", "main"), "0.4.0 [main]\nLicense: Apache-2.0"
        )
