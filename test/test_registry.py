"""
Registry module behavioral tests (lookups and redeclaration policy).

Scope
- Validate name and alias lookups, mapping coercion and declaration order.
- Validate that redeclarations let the later declaration win and are reported
  with DuplicateDeclarationWarning.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
import warnings
from unittest import TestCase

from ordinary import DuplicateDeclarationWarning, Flag, Option, Registry


class TestRegistry(TestCase):
    """Behavioral tests for Registry."""

    def setUp(self):
        self.verbose = Flag("verbose", alias="v")
        self.output = Option("output", alias="o", default="")
        self.author = Option("author")
        self.registry = Registry([self.verbose, self.output, self.author])

    def testLookupByName(self):
        self.assertIs(self.registry.lookup("verbose"), self.verbose)
        self.assertIs(self.registry.lookup("author"), self.author)
        self.assertIsNone(self.registry.lookup("v"))
        self.assertIsNone(self.registry.lookup("missing"))

    def testResolveByAlias(self):
        self.assertIs(self.registry.resolve("o"), self.output)
        self.assertIsNone(self.registry.resolve("a"))
        self.assertIsNone(self.registry.resolve("output"))

    def testMaps(self):
        self.assertEqual(dict(self.registry.aliases), {"v": "verbose", "o": "output"})
        self.assertEqual(list(self.registry.names), ["verbose", "output", "author"])

    def testMapsAreReadOnly(self):
        with self.assertRaises(TypeError):
            self.registry.names["quiet"] = Flag("quiet")  # type: ignore[index]
        with self.assertRaises(TypeError):
            self.registry.aliases["q"] = "quiet"  # type: ignore[index]

    def testIterationFollowsDeclarationOrder(self):
        self.assertEqual(list(self.registry), [self.verbose, self.output, self.author])
        self.assertEqual(len(self.registry), 3)
        self.assertIn("output", self.registry)
        self.assertNotIn("o", self.registry)

    def testMappingsAreCoerced(self):
        registry = Registry([{"name": "message", "kind": "value", "alias": "m"}])
        self.assertIsInstance(registry.resolve("m"), Option)

    def testBadEntriesRejected(self):
        with self.assertRaises(TypeError):
            Registry(["verbose"])

    def testEmpty(self):
        registry = Registry()
        self.assertEqual(len(registry), 0)
        self.assertIsNone(registry.resolve("x"))

    def testRedeclaredNameLastWins(self):
        later = Option("verbose", alias="x")
        with self.assertWarns(DuplicateDeclarationWarning):
            registry = Registry([self.verbose, later])
        self.assertIs(registry.lookup("verbose"), later)
        # the earlier alias no longer points anywhere
        self.assertIsNone(registry.resolve("v"))
        self.assertIs(registry.resolve("x"), later)

    def testRedeclaredAliasLastWins(self):
        later = Flag("version", alias="v")
        with self.assertWarns(DuplicateDeclarationWarning) as context:
            registry = Registry([self.verbose, later])
        self.assertIs(registry.resolve("v"), later)
        self.assertIs(registry.lookup("verbose"), self.verbose)
        self.assertEqual(context.warning.argument, "v")

    def testNoWarningWithoutRedeclaration(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            Registry([self.verbose, self.output])


if __name__ == "__main__":
    unittest.main()
