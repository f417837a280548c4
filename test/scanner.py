"""
Scanner module behavioral tests (token classes, clusters, values, modes).

Scope
- Validate long/short/cluster decomposition and inline values.
- Validate value consumption, including the negative-number carve-out.
- Validate separator, stop-at-positional and permissive modes.
- Validate input faults and their codes.

Conventions
- Test method names follow CamelCase per project convention.
- Specifications are compiled with build() and scanned with scan().
"""
import unittest
from unittest import TestCase

from argot.compiler import build
from argot.faults import (
    InputError,
    UnknownOptionError,
    MissingShortArgError,
    MissingLongArgError,
    InvalidValueError,
    EmptyValueWarning,
)
from argot.handlers import flag, COUNT
from argot.scanner import Result, Scanner, scan


def run(spec, tokens, **options):
    return scan(build(spec), tokens, **options)


class TestResult(TestCase):
    """Behavioral tests for the Result mapping."""

    def testEmptyTokens(self):
        result = run({"-a": bool, "--name": str, "--tag": [str]}, [])
        self.assertIsInstance(result, Result)
        self.assertEqual(result, {"_": []})

    def testPositionalsAndOptionsViews(self):
        result = run({"--name": str}, ["a", "--name", "x", "b"])
        self.assertEqual(result.positionals, ["a", "b"])
        self.assertEqual(result.options, {"--name": "x"})

    def testKeysAreCanonical(self):
        result = run({"--name": str, "-n": "--name"}, ["-n", "x"])
        self.assertEqual(result, {"--name": "x", "_": []})
        self.assertNotIn("-n", result)

    def testFreshResultPerScan(self):
        table = build({"--tag": [str]})
        first = scan(table, ["--tag", "a"])
        second = scan(table, ["--tag", "b"])
        self.assertEqual(first["--tag"], ["a"])
        self.assertEqual(second["--tag"], ["b"])


class TestOptions(TestCase):
    """Behavioral tests for option tokens and their values."""

    def testLongOptionSpacedValue(self):
        self.assertEqual(run({"--name": str}, ["--name", "x"]), {"--name": "x", "_": []})

    def testLongOptionInlineValue(self):
        self.assertEqual(run({"--name": str}, ["--name=x"]), {"--name": "x", "_": []})

    def testInlineValueSplitsOnFirstEquals(self):
        self.assertEqual(run({"--env": str}, ["--env=KEY=VALUE"])["--env"], "KEY=VALUE")

    def testEmptyInlineValueWarns(self):
        with self.assertWarns(EmptyValueWarning):
            result = run({"--name": str}, ["--name="])
        self.assertEqual(result["--name"], "")

    def testInlineValueMayLookLikeAnOption(self):
        self.assertEqual(run({"--name": str}, ["--name=-x"])["--name"], "-x")

    def testShortOptionValue(self):
        self.assertEqual(run({"-n": int}, ["-n", "3"]), {"-n": 3, "_": []})

    def testLastScalarValueWins(self):
        self.assertEqual(run({"--name": str}, ["--name", "a", "--name", "b"])["--name"], "b")

    def testTransitiveAlias(self):
        result = run({"--zed": str, "-y": "--zed", "-x": "-y"}, ["-x", "value"])
        self.assertEqual(result, {"--zed": "value", "_": []})

    def testFlagTakesNoValue(self):
        self.assertEqual(run({"--debug": bool}, ["--debug", "pos"]), {"--debug": True, "_": ["pos"]})

    def testFlagIgnoresInlineValue(self):
        self.assertEqual(run({"--debug": bool}, ["--debug=no"])["--debug"], True)

    def testRepeatableHandler(self):
        result = run({"--tag": [str.upper]}, ["--tag", "foo", "--tag", "bar"])
        self.assertEqual(result["--tag"], ["FOO", "BAR"])

    def testRepeatableFlag(self):
        self.assertEqual(run({"-v": [bool]}, ["-vv"])["-v"], [True, True])

    def testCountHandler(self):
        self.assertEqual(run({"-v": COUNT}, ["-v", "-v", "-v"])["-v"], 3)
        self.assertEqual(run({"-v": COUNT}, ["-vvv"])["-v"], 3)

    def testCountThroughAlias(self):
        self.assertEqual(run({"--verbose": COUNT, "-v": "--verbose"}, ["-vv", "--verbose"])["--verbose"], 3)

    def testCustomFlagHandler(self):
        spec = {"--x": flag(lambda value, name: name.upper())}
        self.assertEqual(run(spec, ["--x", "pos"]), {"--x": "--X", "_": ["pos"]})

    def testHandlerReceivesCanonicalName(self):
        seen = []
        spec = {"--name": lambda value, name: seen.append(name) or value, "-n": "--name"}
        run(spec, ["-n", "x"])
        self.assertEqual(seen, ["--name"])


class TestClusters(TestCase):
    """Behavioral tests for short option clusters."""

    def testClusterWithTrailingValue(self):
        result = run({"-a": bool, "-b": bool, "-c": str}, ["-abc", "val"])
        self.assertEqual(result, {"-a": True, "-b": True, "-c": "val", "_": []})

    def testValueOptionBeforeFlagInCluster(self):
        with self.assertRaises(MissingShortArgError) as context:
            run({"-a": bool, "-c": str}, ["-ca"])
        self.assertEqual(context.exception.code, "ARG_MISSING_REQUIRED_SHORTARG")
        self.assertEqual(context.exception.options["input"], "-c")

    def testClusterEndsOfSeparateTokens(self):
        result = run({"-a": bool, "-b": str, "-c": str}, ["-ab", "x", "-ac", "y"])
        self.assertEqual(result, {"-a": True, "-b": "x", "-c": "y", "_": []})

    def testEqualsInsideClusterIsAnOption(self):
        with self.assertRaises(UnknownOptionError) as context:
            run({"-a": bool, "-b": bool}, ["-a=b"])
        self.assertEqual(context.exception.options["input"], "-=")

    def testEqualsInsideClusterPermissive(self):
        result = run({"-a": bool, "-b": bool}, ["-a=b"], permissive=True)
        self.assertEqual(result, {"-a": True, "-b": True, "_": ["-="]})


class TestMissingValues(TestCase):
    """Behavioral tests for value-taking options without a value."""

    def testNoNextToken(self):
        with self.assertRaises(MissingLongArgError) as context:
            run({"--name": str}, ["--name"])
        self.assertEqual(context.exception.code, "ARG_MISSING_REQUIRED_LONGARG")

    def testNextTokenIsAnOption(self):
        with self.assertRaises(MissingLongArgError):
            run({"--name": str, "-a": bool}, ["--name", "-a"])

    def testNextTokenIsSeparator(self):
        with self.assertRaises(MissingLongArgError):
            run({"--name": str}, ["--name", "--"])

    def testAliasIsNamedInMessage(self):
        with self.assertRaises(MissingLongArgError) as context:
            run({"--name": str, "-n": "--name"}, ["-n"])
        self.assertIn("'-n'", context.exception.message)
        self.assertIn("alias for '--name'", context.exception.message)

    def testLoneDashIsAValue(self):
        self.assertEqual(run({"--file": str}, ["--file", "-"])["--file"], "-")


class TestNegativeNumbers(TestCase):
    """The numeric carve-out lets int/float handlers take negative numbers."""

    def testNegativeInteger(self):
        self.assertEqual(run({"-n": int}, ["-n", "-5"]), {"-n": -5, "_": []})

    def testNegativeFloat(self):
        self.assertEqual(run({"--ratio": float}, ["--ratio", "-.5"])["--ratio"], -0.5)
        self.assertEqual(run({"--ratio": float}, ["--ratio", "-1.25"])["--ratio"], -1.25)

    def testNonNumericTokenStillMissing(self):
        with self.assertRaises(MissingLongArgError):
            run({"-n": int}, ["-n", "-x"])

    def testNonNumericHandlerRefusesNegative(self):
        with self.assertRaises(MissingLongArgError):
            run({"-n": str}, ["-n", "-5"])

    def testRepeatableNumericRefusesNegative(self):
        with self.assertRaises(MissingLongArgError):
            run({"-n": [int]}, ["-n", "-5"])

    def testDotWithoutDigitIsNotANumber(self):
        with self.assertRaises(MissingLongArgError):
            run({"-n": float}, ["-n", "-."])


class TestPositionals(TestCase):
    """Behavioral tests for positionals, the separator and scan modes."""

    def testPlainPositionalsKeepOrder(self):
        self.assertEqual(run({}, ["a", "b", "c"])["_"], ["a", "b", "c"])

    def testLoneDashAndEmptyTokenArePositionals(self):
        self.assertEqual(run({}, ["-", ""])["_"], ["-", ""])

    def testSeparator(self):
        result = run({"-a": bool, "-b": bool}, ["-a", "--", "-b", "c"])
        self.assertEqual(result, {"-a": True, "_": ["-b", "c"]})

    def testSecondSeparatorIsPositional(self):
        self.assertEqual(run({}, ["--", "--", "x"])["_"], ["--", "x"])

    def testStopAtPositional(self):
        result = run({"-a": bool}, ["pos1", "-a"], stop_at_positional=True)
        self.assertEqual(result, {"_": ["pos1", "-a"]})

    def testStopAtPositionalParsesLeadingOptions(self):
        result = run({"-a": bool}, ["-a", "pos1", "-a", "--"], stop_at_positional=True)
        self.assertEqual(result, {"-a": True, "_": ["pos1", "-a", "--"]})

    def testPermissiveKeepsScanPosition(self):
        result = run({"-a": bool}, ["x", "--bogus", "y", "-a"], permissive=True)
        self.assertEqual(result, {"-a": True, "_": ["x", "--bogus", "y"]})

    def testPermissiveKeepsInlineValue(self):
        result = run({}, ["--bogus=1", "z"], permissive=True)
        self.assertEqual(result["_"], ["--bogus=1", "z"])

    def testPermissiveClusterUnits(self):
        result = run({"-a": bool}, ["-za"], permissive=True)
        self.assertEqual(result, {"-a": True, "_": ["-z"]})

    def testPermissiveUnknownCountsForStopAtPositional(self):
        result = run({"-a": bool}, ["--bogus", "-a"], permissive=True, stop_at_positional=True)
        self.assertEqual(result, {"_": ["--bogus", "-a"]})


class TestInputFaults(TestCase):
    """Behavioral tests for input faults raised while scanning."""

    def testUnknownOption(self):
        with self.assertRaises(UnknownOptionError) as context:
            run({"--name": str}, ["--bogus"])
        self.assertEqual(context.exception.code, "ARG_UNKNOWN_OPTION")
        self.assertIsInstance(context.exception, InputError)
        self.assertIn("first position", context.exception.message)

    def testUnknownOptionSuggestsCloseMatch(self):
        with self.assertRaises(UnknownOptionError) as context:
            run({"--name": str}, ["--nam"])
        self.assertEqual(context.exception.options["suggestions"][0], "--name")
        self.assertIn("--name", context.exception.hint)

    def testUnknownOptionNamesTypedKey(self):
        with self.assertRaises(UnknownOptionError) as context:
            run({"-x": "--missing"}, ["-x"])
        self.assertEqual(context.exception.options["input"], "-x")

    def testUnknownOptionPosition(self):
        with self.assertRaises(UnknownOptionError) as context:
            run({"--name": str}, ["--name", "a", "b", "--bogus"])
        self.assertEqual(context.exception.options["index"], 4)
        self.assertIn("fourth position", context.exception.message)

    def testInvalidValue(self):
        with self.assertRaises(InvalidValueError) as context:
            run({"--port": int}, ["--port", "http"])
        self.assertEqual(context.exception.code, "ARG_INVALID_VALUE")
        self.assertEqual(context.exception.options["value"], "http")
        self.assertIsInstance(context.exception.__cause__, ValueError)

    def testHandlerFaultsPropagate(self):
        def strict(value):
            raise UnknownOptionError("custom fault")

        with self.assertRaises(UnknownOptionError) as context:
            run({"--x": strict}, ["--x", "1"])
        self.assertEqual(context.exception.message, "custom fault")

    def testHandlerTypeErrorsPropagate(self):
        def broken(value):
            return value + 1

        with self.assertRaises(TypeError) as context:
            run({"--x": broken}, ["--x", "1"])
        self.assertNotIsInstance(context.exception, InvalidValueError)

    def testOtherHandlerExceptionsPropagate(self):
        def broken(value):
            raise KeyError(value)

        with self.assertRaises(KeyError):
            run({"--x": broken}, ["--x", "1"])


class TestScanner(TestCase):
    """The Scanner class can be driven directly."""

    def testDirectUse(self):
        scanner = Scanner(build({"-a": bool}), permissive=True)
        self.assertEqual(scanner.scan(["-a", "-b"]), {"-a": True, "_": ["-b"]})
        self.assertEqual(scanner.scan(["x"]), {"_": ["x"]})


if __name__ == "__main__":
    unittest.main()
