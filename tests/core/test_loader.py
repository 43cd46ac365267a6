"""Tests for loading the user's commands file."""

import sys
import unittest

from lbq.core.errors import ConfigError, InvalidRegistrationError
from lbq.core.loader import (
    COMMANDS_TEMPLATE,
    USER_MODULE_NAME,
    init_commands_file,
    load_install,
    load_registry,
)
from test_utils import lbq_env, write_commands


class InitCommandsFileTests(unittest.TestCase):
    def test_creates_file_and_parents(self) -> None:
        with lbq_env() as env:
            target = env.base / "nested" / "dir" / "commands.py"
            self.assertTrue(init_commands_file(target))
            self.assertEqual(target.read_text(encoding="utf-8"), COMMANDS_TEMPLATE)

    def test_existing_file_untouched(self) -> None:
        with lbq_env("# mine\n") as env:
            self.assertFalse(init_commands_file(env.commands_file))
            self.assertEqual(env.commands_file.read_text(encoding="utf-8"), "# mine\n")

    def test_template_registers_working_actions(self) -> None:
        with lbq_env() as env:
            init_commands_file(env.commands_file)
            registry = load_registry(env.commands_file)
            self.assertEqual(len(registry), 4)
            found = registry.find(["hello", "there"])
            self.assertEqual(found.captures, [["hello"], ["there"]])
            self.assertEqual(registry.find([".r6"]).captures, [[".r6", "6"]])
            self.assertEqual(registry.find(["echo", "a", "b"]).rest, ["a", "b"])


class LoadInstallTests(unittest.TestCase):
    def tearDown(self) -> None:
        sys.modules.pop(USER_MODULE_NAME, None)

    def test_returns_install_callable(self) -> None:
        source = """
            def install(register):
                register("ping", lambda m: "pong")
        """
        with lbq_env(source) as env:
            install = load_install(env.commands_file)
            self.assertTrue(callable(install))

    def test_missing_file(self) -> None:
        with lbq_env() as env:
            with self.assertRaises(ConfigError) as ctx:
                load_install(env.commands_file)
            self.assertIn(str(env.commands_file), str(ctx.exception))
            self.assertEqual(ctx.exception.path, env.commands_file)

    def test_import_error_is_chained(self) -> None:
        with lbq_env("raise RuntimeError('broken config')\n") as env:
            with self.assertRaises(ConfigError) as ctx:
                load_install(env.commands_file)
            self.assertIsInstance(ctx.exception.__cause__, RuntimeError)
            self.assertNotIn(USER_MODULE_NAME, sys.modules)

    def test_syntax_error(self) -> None:
        with lbq_env("def install(register:\n") as env:
            with self.assertRaises(ConfigError):
                load_install(env.commands_file)

    def test_install_must_be_callable(self) -> None:
        for source in ("x = 1\n", "install = 'nope'\n"):
            with self.subTest(source=source):
                with lbq_env(source) as env:
                    with self.assertRaises(ConfigError):
                        load_install(env.commands_file)


class LoadRegistryTests(unittest.TestCase):
    def tearDown(self) -> None:
        sys.modules.pop(USER_MODULE_NAME, None)

    def test_registers_actions_from_file(self) -> None:
        source = """
            import re

            def install(register):
                register("hello", lambda m: "world", "Say hello")
                register({"pattern": ["foo", re.compile("bar")], "run": lambda a, b: "fb"})
                register(lambda *rest: rest, "fallback")
        """
        with lbq_env(source) as env:
            registry = load_registry(env.commands_file)
            self.assertEqual([a.length for a in registry.actions], [1, 2, 0])
            self.assertEqual(registry.find(["FOO", "bar"]).captures, [["FOO"], ["bar"]])

    def test_async_install(self) -> None:
        source = """
            import asyncio

            async def install(register):
                await asyncio.sleep(0)
                register("later", lambda m: None)
        """
        with lbq_env(source) as env:
            self.assertEqual(len(load_registry(env.commands_file)), 1)

    def test_invalid_registration_propagates(self) -> None:
        source = """
            def install(register):
                register("no handler here")
        """
        with lbq_env(source) as env:
            with self.assertRaises(InvalidRegistrationError):
                load_registry(env.commands_file)

    def test_logs_loaded_file(self) -> None:
        with lbq_env("def install(register):\n    pass\n") as env:
            load_registry(env.commands_file)
            log_text = (env.state_dir / "lbq.log").read_text(encoding="utf-8")
            self.assertIn(f"loaded {env.commands_file}", log_text)
            self.assertIn("0 action(s) registered", log_text)


if __name__ == "__main__":
    unittest.main()
