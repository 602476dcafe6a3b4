"""
Declaration tests (Specification builder, Option and Positional invariants).

Scope
- Validate lookup-or-create option declaration and blank-name handling.
- Validate uniqueness of short/long names and of the variadic positional.
- Validate parameter names and eager pattern compilation.
- Validate presets, lookups and the back-reference to the specification.

Conventions
- Test method names follow CamelCase per project convention.
- Tests use the public API only.
"""
import re
import unittest
from unittest import TestCase

from flagpole import (
    Specification,
    Option,
    Positional,
    DeclarationError,
    BlankNameError,
    DuplicateDeclarationError,
    DuplicateVariadicError,
    InvalidPatternError,
)


class TestOptionDeclaration(TestCase):
    """Declaring options through Specification.option()."""

    def setUp(self):
        self.spec = Specification()

    def testOptionDefaults(self):
        option = self.spec.option("x")
        self.assertIsInstance(option, Option)
        self.assertEqual(option.short_name, "x")
        self.assertIsNone(option.long_name)
        self.assertIsNone(option.parameter_name)
        self.assertIsNone(option.parameter_pattern)
        self.assertFalse(option.is_optional)
        self.assertFalse(option.is_parameterized)
        self.assertIsNone(option.description)

    def testShortNameIsTrimmed(self):
        option = self.spec.option("  x ", " ex ")
        self.assertEqual(option.short_name, "x")
        self.assertEqual(option.long_name, "ex")

    def testBlankShortNameDeclaresNothing(self):
        self.assertIsNone(self.spec.option("   "))
        self.assertIsNone(self.spec.option(None))
        self.assertEqual(self.spec.options, ())

    def testRedeclarationReturnsSameOption(self):
        first = self.spec.option("x", "ex")
        self.assertIs(self.spec.option("x"), first)
        self.assertIs(self.spec.option("x", "ex"), first)
        self.assertEqual(len(self.spec.options), 1)

    def testRedeclarationAddsMissingLongName(self):
        first = self.spec.option("x")
        self.assertIs(self.spec.option("x", "ex"), first)
        self.assertEqual(first.long_name, "ex")

    def testRedeclarationWithOtherLongNameRejected(self):
        self.spec.option("x", "ex")
        with self.assertRaises(DuplicateDeclarationError):
            self.spec.option("x", "other")

    def testShortNameClashingWithLongNameRejected(self):
        self.spec.option("v", "verbose")
        with self.assertRaises(DuplicateDeclarationError):
            self.spec.option("verbose")

    def testDuplicateLongNameRejected(self):
        self.spec.option("a", "all")
        with self.assertRaises(DuplicateDeclarationError):
            self.spec.option("b", "all")
        # The failed declaration leaves nothing behind.
        self.assertFalse(self.spec.is_declared_option("b"))
        self.assertEqual(len(self.spec.options), 1)

    def testWithLongNameClashRejected(self):
        self.spec.option("a", "all")
        option = self.spec.option("b")
        with self.assertRaises(DuplicateDeclarationError):
            option.with_long_name("all")
        self.assertIsNone(option.long_name)

    def testWithLongNameBlankIgnored(self):
        option = self.spec.option("a").with_long_name("  ")
        self.assertIsNone(option.long_name)

    def testDeclarationErrorsAreValueErrors(self):
        self.spec.option("a", "all")
        with self.assertRaises(ValueError):
            self.spec.option("b", "all")
        self.assertTrue(issubclass(DuplicateDeclarationError, DeclarationError))

    def testWithParameter(self):
        option = self.spec.option("o").with_parameter(" file ")
        self.assertEqual(option.parameter_name, "file")
        self.assertTrue(option.is_parameterized)

    def testWithParameterBlankRejected(self):
        option = self.spec.option("o")
        with self.assertRaises(BlankNameError):
            option.with_parameter("  ")
        with self.assertRaises(BlankNameError):
            option.with_parameter(None)

    def testWithPatternCompilesEagerly(self):
        option = self.spec.option("n").with_parameter("count").with_pattern(r"\d+")
        self.assertIsInstance(option.parameter_pattern, re.Pattern)
        self.assertEqual(option.parameter_pattern.pattern, r"\d+")

    def testWithPatternNoneClears(self):
        option = self.spec.option("n").with_pattern(r"\d+").with_pattern(None)
        self.assertIsNone(option.parameter_pattern)

    def testWithPatternInvalidRejected(self):
        option = self.spec.option("n")
        with self.assertRaises(InvalidPatternError) as context:
            option.with_pattern("(unclosed")
        self.assertIsInstance(context.exception.__cause__, re.error)

    def testOptionalAndDescription(self):
        option = self.spec.option("x").optional().with_description("line one\nline two")
        self.assertTrue(option.is_optional)
        self.assertEqual(option.description, "line one\nline two")
        self.assertFalse(option.optional(False).is_optional)

    def testFieldsAreReadOnly(self):
        option = self.spec.option("x")
        with self.assertRaises(AttributeError):
            option.short_name = "y"

    def testForms(self):
        self.assertEqual(self.spec.option("x").forms, ("-x",))
        self.assertEqual(self.spec.option("v", "verbose").forms, ("-v", "--verbose"))

    def testDoneReturnsSpecification(self):
        option = self.spec.option("x")
        self.assertIs(option.specification, self.spec)
        self.assertIs(option.done(), self.spec)

    def testRepr(self):
        option = self.spec.option("v", "verbose")
        self.assertTrue(repr(option).startswith("option(short_name='v', long_name='verbose'"))
        self.assertEqual(str(option), "option -v")

    def testDeclarationOrderKept(self):
        self.spec.option("b").done().option("a").done().option("c")
        self.assertEqual([option.short_name for option in self.spec.options], ["b", "a", "c"])


class TestPositionalDeclaration(TestCase):
    """Declaring positionals through Specification.positional()."""

    def setUp(self):
        self.spec = Specification()

    def testPositionalDefaults(self):
        positional = self.spec.positional(" source ")
        self.assertIsInstance(positional, Positional)
        self.assertEqual(positional.name, "source")
        self.assertFalse(positional.is_optional)
        self.assertFalse(positional.is_variadic)
        self.assertIsNone(positional.description)

    def testBlankNameDeclaresNothing(self):
        self.assertIsNone(self.spec.positional(""))
        self.assertIsNone(self.spec.positional(None))
        self.assertEqual(self.spec.positionals, ())

    def testOrderKept(self):
        self.spec.positional("a").done().positional("b")
        self.assertEqual([positional.name for positional in self.spec.positionals], ["a", "b"])

    def testSecondVariadicRejected(self):
        self.spec.positional("a").variadic()
        positional = self.spec.positional("b")
        with self.assertRaises(DuplicateVariadicError):
            positional.variadic()
        self.assertFalse(positional.is_variadic)

    def testVariadicAgainIsAccepted(self):
        positional = self.spec.positional("a").variadic().variadic()
        self.assertTrue(positional.is_variadic)

    def testDoneReturnsSpecification(self):
        positional = self.spec.positional("a")
        self.assertIs(positional.specification, self.spec)
        self.assertIs(positional.optional().with_description("d").done(), self.spec)
        self.assertTrue(positional.is_optional)

    def testRepr(self):
        positional = self.spec.positional("files").variadic()
        self.assertEqual(
            repr(positional),
            "positional(name='files', is_optional=False, is_variadic=True, description=None)",
        )


class TestPresets(TestCase):
    """with_verbose_flag / with_quiet_flag / with_help_flag."""

    def testVerbosePreset(self):
        spec = Specification().with_verbose_flag()
        option = spec.lookup_option("v")
        self.assertEqual(option.long_name, "verbose")
        self.assertTrue(option.is_optional)
        self.assertEqual(option.description, "be more chatty")

    def testPresetsAreIdempotent(self):
        spec = Specification().with_verbose_flag().with_verbose_flag()
        self.assertEqual(len(spec.options), 1)

    def testPresetKeepsHandDeclaredOption(self):
        spec = Specification()
        spec.option("q", "silent")
        self.assertIs(spec.with_quiet_flag(), spec)
        self.assertEqual(spec.lookup_option("q").long_name, "silent")

    def testAllPresets(self):
        spec = Specification().with_help_flag().with_quiet_flag().with_verbose_flag()
        self.assertEqual([option.forms for option in spec.options], [
            ("-h", "--help"),
            ("-q", "--quiet"),
            ("-v", "--verbose"),
        ])


class TestLookups(TestCase):
    """Specification lookups by short and long names."""

    def setUp(self):
        self.spec = Specification().with_verbose_flag()
        self.spec.option("o")

    def testLookupIgnoresHyphens(self):
        verbose = self.spec.lookup_option("v")
        self.assertIs(self.spec.lookup_option("-v"), verbose)
        self.assertIs(self.spec.lookup_option("verbose"), verbose)
        self.assertIs(self.spec.lookup_option("--verbose"), verbose)

    def testLookupUnknown(self):
        self.assertIsNone(self.spec.lookup_option("x"))
        self.assertIsNone(self.spec.lookup_option(None))
        self.assertIsNone(self.spec.lookup_long_option("o"))

    def testDeclaredChecks(self):
        self.assertTrue(self.spec.is_declared_option("o"))
        self.assertFalse(self.spec.is_declared_option("verbose"))
        self.assertTrue(self.spec.is_declared_long_option("verbose"))
        self.assertFalse(self.spec.is_declared_long_option(None))


if __name__ == "__main__":
    unittest.main()
