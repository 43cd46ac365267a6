# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

import importlib
import unittest


class CliModuleTests(unittest.TestCase):
    def test_cli_main_is_callable(self) -> None:
        module = importlib.import_module("lbq.cli.main")
        self.assertTrue(callable(getattr(module, "main", None)))

    def test_dunder_main_importable(self) -> None:
        module = importlib.import_module("lbq.cli.__main__")
        self.assertTrue(callable(getattr(module, "main", None)))
