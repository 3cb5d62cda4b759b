#!/usr/bin/env python

"""
nhi_check/tools/tests/check_nhi_tests.py

===============================================================================

    Copyright (C) 2015, University of Cambridge, Department of Psychiatry.
    Created by Rudolf Cardinal (rnc1001@cam.ac.uk).

    This file is part of NHI-check.

    NHI-check is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    NHI-check is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
    GNU General Public License for more details.

    You should have received a copy of the GNU General Public License
    along with NHI-check. If not, see <https://www.gnu.org/licenses/>.

===============================================================================

Unit testing.

"""

from io import StringIO
import os
from tempfile import TemporaryDirectory
from typing import List, Tuple
from unittest import mock, TestCase

from nhi_check.common.constants import EnvVar, EXIT_FAILURE, EXIT_SUCCESS
from nhi_check.tools.check_nhi import (
    all_acceptable,
    check_nhis,
    classify_nhi,
    entry_point,
    main,
    NhiResult,
)


class ClassifyNhiTests(TestCase):
    def test_classify(self) -> None:
        self.assertEqual(classify_nhi("JBX3656"), NhiResult.VALID)
        self.assertEqual(classify_nhi("ZAC5361"), NhiResult.VALID)
        self.assertEqual(classify_nhi("ZZZ0044"), NhiResult.INVALID)
        self.assertEqual(classify_nhi(""), NhiResult.INVALID)

    def test_classify_excluding_test_nhis(self) -> None:
        self.assertEqual(
            classify_nhi("ZAC5361", exclude_test=True), NhiResult.TEST
        )
        self.assertEqual(
            classify_nhi("jbx3656", exclude_test=True), NhiResult.VALID
        )
        # Invalid beats test
        self.assertEqual(
            classify_nhi("ZZZ0044", exclude_test=True), NhiResult.INVALID
        )

    def test_check_nhis_preserves_order(self) -> None:
        results = check_nhis(["ZZZ0044", "zbn77vl", "ABC1235"])
        self.assertEqual(
            results,
            [
                ("ZZZ0044", NhiResult.INVALID),
                ("zbn77vl", NhiResult.VALID),
                ("ABC1235", NhiResult.VALID),
            ],
        )
        self.assertFalse(all_acceptable(results))
        self.assertTrue(all_acceptable(results[1:]))


@mock.patch("nhi_check.tools.check_nhi.main_only_quicksetup_rootlogger")
class CheckNhiMainTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        env_patcher = mock.patch.dict(os.environ, {EnvVar.EXCLUDE_TEST: ""})
        env_patcher.start()
        self.addCleanup(env_patcher.stop)

    def run_main(self, argv: List[str]) -> Tuple[int, str]:
        with mock.patch("sys.stdout", new_callable=StringIO) as stdout:
            exit_code = main(argv)
        return exit_code, stdout.getvalue()

    def test_all_valid(self, _) -> None:
        exit_code, output = self.run_main(["ZAC5361", "zbn77vl"])
        self.assertEqual(exit_code, EXIT_SUCCESS)
        self.assertEqual(
            output.splitlines(), ["ZAC5361,valid", "zbn77vl,valid"]
        )

    def test_some_invalid(self, _) -> None:
        exit_code, output = self.run_main(["ZAC5361", "ZZZ00AA"])
        self.assertEqual(exit_code, EXIT_FAILURE)
        self.assertEqual(
            output.splitlines(), ["ZAC5361,valid", "ZZZ00AA,invalid"]
        )

    def test_exclude_test_flag(self, _) -> None:
        exit_code, output = self.run_main(["--exclude_test", "ZAC5361"])
        self.assertEqual(exit_code, EXIT_FAILURE)
        self.assertEqual(output.splitlines(), ["ZAC5361,test"])

    def test_exclude_test_from_environment(self, _) -> None:
        with mock.patch.dict(os.environ, {EnvVar.EXCLUDE_TEST: "Yes"}):
            exit_code, output = self.run_main(["ZAC5361", "JBX3656"])
        self.assertEqual(exit_code, EXIT_FAILURE)
        self.assertEqual(
            output.splitlines(), ["ZAC5361,test", "JBX3656,valid"]
        )

    def test_environment_false_value(self, _) -> None:
        with mock.patch.dict(os.environ, {EnvVar.EXCLUDE_TEST: "no"}):
            exit_code, _output = self.run_main(["ZAC5361"])
        self.assertEqual(exit_code, EXIT_SUCCESS)

    def test_input_and_output_files(self, _) -> None:
        with TemporaryDirectory() as tmpdir:
            infile = os.path.join(tmpdir, "nhis.txt")
            outfile = os.path.join(tmpdir, "results.csv")
            with open(infile, "w") as f:
                f.write("# Some NHIs\n\n  ZBN77VL  \nDAB8233\n")
            exit_code = main(
                ["JBX3656", "--infile", infile, "--outfile", outfile]
            )
            with open(outfile) as f:
                lines = f.read().splitlines()
        self.assertEqual(exit_code, EXIT_FAILURE)
        self.assertEqual(
            lines, ["JBX3656,valid", "ZBN77VL,valid", "DAB8233,invalid"]
        )

    def test_nothing_to_check(self, _) -> None:
        with self.assertRaises(SystemExit) as cm:
            self.run_main([])
        self.assertEqual(cm.exception.code, EXIT_FAILURE)

    def test_include_test_overrides_environment(self, _) -> None:
        with mock.patch.dict(os.environ, {EnvVar.EXCLUDE_TEST: "true"}):
            exit_code, output = self.run_main(["--include_test", "ZAC5361"])
        self.assertEqual(exit_code, EXIT_SUCCESS)
        self.assertEqual(output.splitlines(), ["ZAC5361,valid"])

    def test_last_test_flag_wins(self, _) -> None:
        exit_code, output = self.run_main(
            ["--include_test", "--exclude_test", "ZAC5361"]
        )
        self.assertEqual(exit_code, EXIT_FAILURE)
        self.assertEqual(output.splitlines(), ["ZAC5361,test"])

    def test_infile_from_stdin(self, _) -> None:
        stdin = StringIO("# from a pipe\nZAC5361\n\nzzz00aa\n")
        with mock.patch("sys.stdin", stdin):
            exit_code, output = self.run_main(["--infile", "-"])
        self.assertEqual(exit_code, EXIT_FAILURE)
        self.assertEqual(
            output.splitlines(), ["ZAC5361,valid", "zzz00aa,invalid"]
        )

    def test_infile_with_no_nhis(self, _) -> None:
        stdin = StringIO("# nothing here\n\n   \n")
        with mock.patch("sys.stdin", stdin):
            with self.assertLogs("nhi_check.tools.check_nhi", "WARNING"):
                exit_code, output = self.run_main(["--infile", "-"])
        self.assertEqual(exit_code, EXIT_SUCCESS)
        self.assertEqual(output, "")


class EntryPointTests(TestCase):
    def test_exit_code_is_passed_on(self) -> None:
        with mock.patch(
            "nhi_check.tools.check_nhi.main", return_value=EXIT_FAILURE
        ):
            with self.assertRaises(SystemExit) as cm:
                entry_point()
        self.assertEqual(cm.exception.code, EXIT_FAILURE)

    def test_system_exit_passes_through(self) -> None:
        with mock.patch(
            "nhi_check.tools.check_nhi.main", side_effect=SystemExit(2)
        ):
            with self.assertRaises(SystemExit) as cm:
                entry_point()
        self.assertEqual(cm.exception.code, 2)

    def test_exceptions_are_reported(self) -> None:
        with mock.patch(
            "nhi_check.tools.check_nhi.main", side_effect=RuntimeError("boom")
        ):
            with self.assertLogs("nhi_check.common.exceptions", "CRITICAL"):
                with self.assertRaises(SystemExit) as cm:
                    entry_point()
        self.assertEqual(cm.exception.code, EXIT_FAILURE)
