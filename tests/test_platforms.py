"""Tests for host platform detection and compiler path lookup."""

import unittest
from pathlib import Path

from benchgen.errors import ConfigurationError
from benchgen.platforms import (
    DEFAULT_COMPILER_PATHS,
    PlatformTarget,
    check_tool_table,
    detect_platform,
    resolve_tool_path,
)


class DetectPlatformTests(unittest.TestCase):

    def test_nt_is_windows(self):
        self.assertIs(detect_platform("nt"), PlatformTarget.WINDOWS)

    def test_posix_is_unix(self):
        self.assertIs(detect_platform("posix"), PlatformTarget.UNIX)

    def test_default_reads_host(self):
        self.assertIn(detect_platform(), set(PlatformTarget))

    def test_unsupported_platform_is_configuration_error(self):
        with self.assertRaises(ConfigurationError) as ctx:
            detect_platform("java")
        self.assertIn("java", str(ctx.exception))


class ResolveToolPathTests(unittest.TestCase):

    def test_total_over_declared_platforms(self):
        for platform in PlatformTarget:
            path = resolve_tool_path(platform)
            self.assertIsInstance(path, Path)
            self.assertTrue(str(path))

    def test_platform_correct_paths(self):
        self.assertEqual(
            resolve_tool_path(PlatformTarget.WINDOWS),
            Path("../../../bin/compiler/Windows-Debug/bebopc.exe"),
        )
        self.assertEqual(
            resolve_tool_path(PlatformTarget.UNIX),
            Path("../../../bin/compiler/Linux-Debug/bebopc"),
        )

    def test_repeatable_and_does_not_touch_filesystem(self):
        # The default paths do not exist here; lookup must still succeed.
        first = resolve_tool_path(PlatformTarget.UNIX)
        second = resolve_tool_path(PlatformTarget.UNIX)
        self.assertEqual(first, second)
        self.assertFalse(first.exists())

    def test_custom_table(self):
        table = {PlatformTarget.WINDOWS: "C:/tools/bebopc.exe", PlatformTarget.UNIX: "/opt/bebopc"}
        self.assertEqual(resolve_tool_path(PlatformTarget.UNIX, table), Path("/opt/bebopc"))

    def test_missing_entry_is_configuration_error(self):
        with self.assertRaises(ConfigurationError):
            resolve_tool_path(PlatformTarget.WINDOWS, {PlatformTarget.UNIX: "/opt/bebopc"})


class CheckToolTableTests(unittest.TestCase):

    def test_default_table_is_total(self):
        check_tool_table(DEFAULT_COMPILER_PATHS)

    def test_blank_entry_rejected(self):
        table = dict(DEFAULT_COMPILER_PATHS)
        table[PlatformTarget.WINDOWS] = "  "
        with self.assertRaises(ConfigurationError) as ctx:
            check_tool_table(table)
        self.assertIn("windows", str(ctx.exception))
