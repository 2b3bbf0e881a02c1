"""
AssertKit — Structural Tree Comparator

Compares two hierarchical documents by shape only: tag names, the presence
of attribute names, and child counts. Attribute values and text content are
never compared.

Check order per node pair:
  1. tag names equal                       (fatal: ends the comparison)
  2. attribute names, if check_attributes  (reported, comparison continues)
  3. child counts, text leaves stripped    (fatal: ends the comparison)
  4. recurse pairwise over children in document order

Every mismatch is handed to ``on_mismatch`` as soon as it is found and also
collected in the returned list.

Usage:
    expected = TreeNode.from_xml("<a><b/></a>")
    actual = TreeNode.from_xml("<a><b/><c/></a>")
    equal_structure(expected, actual)   # ['Number of child nodes of "a" differs ...']
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Callable

import structlog
from pydantic import Field

from assertkit.engine.types import FATAL_MISMATCHES, MismatchKind, StructureMismatch
from assertkit.primitives.common import AssertKitBaseModel

logger = structlog.get_logger().bind(system="assertkit.structure")


class TreeNode(AssertKitBaseModel):
    """An element of a hierarchical document."""

    tag: str
    attributes: dict[str, str] = Field(default_factory=dict)
    children: list[TreeNode] = Field(default_factory=list)
    text: list[str] = Field(default_factory=list)  # non-structural, never compared

    @classmethod
    def from_element(cls, element: ET.Element) -> TreeNode:
        """Build a tree from an ElementTree element, keeping text as leaves."""
        text: list[str] = []
        if element.text:
            text.append(element.text)
        children: list[TreeNode] = []
        for child in element:
            if not isinstance(child.tag, str):
                # comments and processing instructions are character data
                continue
            children.append(cls.from_element(child))
            if child.tail:
                text.append(child.tail)
        return cls(
            tag=element.tag,
            attributes=dict(element.attrib),
            children=children,
            text=text,
        )

    @classmethod
    def from_xml(cls, document: str | bytes) -> TreeNode:
        """Parse an XML string and build a tree from its root element."""
        return cls.from_element(ET.fromstring(document))


class _StructureAbort(Exception):
    """Stops the walk after a fatal mismatch."""


class StructureComparator:
    """Walks two trees and records every structural mismatch."""

    def __init__(
        self,
        check_attributes: bool = False,
        on_mismatch: Callable[[StructureMismatch], None] | None = None,
    ) -> None:
        self._check_attributes = check_attributes
        self._on_mismatch = on_mismatch
        self._mismatches: list[StructureMismatch] = []

    def compare(self, expected: TreeNode, actual: TreeNode) -> list[StructureMismatch]:
        self._mismatches = []
        try:
            self._walk(expected, actual, expected.tag)
        except _StructureAbort:
            pass
        return list(self._mismatches)

    def _walk(self, expected: TreeNode, actual: TreeNode, path: str) -> None:
        if expected.tag != actual.tag:
            self._report(
                path,
                MismatchKind.TAG,
                f'Tag name "{actual.tag}" does not match expected "{expected.tag}"',
            )

        if self._check_attributes:
            self._check_attribute_names(expected, actual, path)

        if len(expected.children) != len(actual.children):
            self._report(
                path,
                MismatchKind.CHILD_COUNT,
                f'Number of child nodes of "{expected.tag}" differs: '
                f"expected {len(expected.children)}, got {len(actual.children)}",
            )

        for expected_child, actual_child in zip(expected.children, actual.children):
            self._walk(expected_child, actual_child, f"{path}/{expected_child.tag}")

    def _check_attribute_names(self, expected: TreeNode, actual: TreeNode, path: str) -> None:
        if len(actual.attributes) < len(expected.attributes):
            self._report(
                path,
                MismatchKind.ATTRIBUTE_COUNT,
                f'Number of attributes on node "{expected.tag}" does not match: '
                f"expected {len(expected.attributes)}, got {len(actual.attributes)}",
            )
        for name in expected.attributes:
            if name not in actual.attributes:
                self._report(
                    path,
                    MismatchKind.ATTRIBUTE_MISSING,
                    f'Could not find attribute "{name}" on node "{expected.tag}"',
                )

    def _report(self, path: str, kind: MismatchKind, message: str) -> None:
        mismatch = StructureMismatch(
            path=path,
            kind=kind,
            message=message,
            fatal=kind in FATAL_MISMATCHES,
        )
        self._mismatches.append(mismatch)
        logger.debug("structure_mismatch", path=path, kind=kind.value, fatal=mismatch.fatal)
        if self._on_mismatch is not None:
            self._on_mismatch(mismatch)
        if mismatch.fatal:
            raise _StructureAbort()


def compare_structure(
    expected: TreeNode,
    actual: TreeNode,
    check_attributes: bool = False,
    on_mismatch: Callable[[StructureMismatch], None] | None = None,
) -> list[StructureMismatch]:
    """All structural mismatches between two trees, as records."""
    return StructureComparator(check_attributes, on_mismatch).compare(expected, actual)


def equal_structure(
    expected: TreeNode,
    actual: TreeNode,
    check_attributes: bool = False,
    on_mismatch: Callable[[str], None] | None = None,
) -> list[str]:
    """
    Mismatch descriptions between two trees. Empty list means structurally equal.

    ``on_mismatch`` receives each description as soon as it is detected.
    """
    callback = None
    if on_mismatch is not None:
        def callback(mismatch: StructureMismatch) -> None:
            on_mismatch(mismatch.message)

    return [m.message for m in compare_structure(expected, actual, check_attributes, callback)]
