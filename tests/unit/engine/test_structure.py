"""Tests for the Structural Tree Comparator."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from assertkit.engine.structure import TreeNode, compare_structure, equal_structure
from assertkit.engine.types import MismatchKind


def _xml(document: str) -> TreeNode:
    return TreeNode.from_xml(document)


class TestTreeNodeBuilder:
    def test_from_xml_keeps_shape(self):
        node = _xml('<root a="1"><child/>text<child b="2"/></root>')
        assert node.tag == "root"
        assert node.attributes == {"a": "1"}
        assert [c.tag for c in node.children] == ["child", "child"]
        assert node.children[1].attributes == {"b": "2"}

    def test_text_becomes_leaves(self):
        node = _xml("<a>head<b/>tail</a>")
        assert node.text == ["head", "tail"]
        assert len(node.children) == 1

    def test_comments_are_not_children(self):
        parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
        element = ET.fromstring("<a><!-- note --><b/></a>", parser=parser)
        node = TreeNode.from_element(element)
        assert [c.tag for c in node.children] == ["b"]


class TestEqualStructure:
    def test_identical_trees(self):
        assert equal_structure(_xml("<a><b/><c><d/></c></a>"), _xml("<a><b/><c><d/></c></a>")) == []

    def test_text_is_ignored(self):
        assert equal_structure(_xml("<a>x<b>1</b></a>"), _xml("<a><b>something else</b>y</a>")) == []

    def test_attribute_values_are_ignored(self):
        assert equal_structure(_xml('<a x="1"/>'), _xml('<a x="2"/>'), check_attributes=True) == []

    def test_extra_child_is_fatal(self):
        mismatches = compare_structure(_xml("<a><b/></a>"), _xml("<a><b/><c/></a>"))
        assert len(mismatches) == 1
        assert mismatches[0].kind == MismatchKind.CHILD_COUNT
        assert mismatches[0].fatal
        assert 'Number of child nodes of "a" differs' in mismatches[0].message

    def test_child_count_mismatch_stops_comparison(self):
        # the differing tag under <x> would be reported if the walk continued
        expected = _xml("<a><x><p/></x><b/></a>")
        actual = _xml("<a><x><q/></x></a>")
        mismatches = compare_structure(expected, actual)
        assert [m.kind for m in mismatches] == [MismatchKind.CHILD_COUNT]

    def test_tag_mismatch_is_fatal(self):
        mismatches = compare_structure(_xml("<a><b/><c/></a>"), _xml("<a><x/><y/></a>"))
        assert len(mismatches) == 1
        assert mismatches[0].kind == MismatchKind.TAG
        assert mismatches[0].path == "a/b"

    def test_extra_attribute_tolerated(self):
        assert equal_structure(_xml('<a x="1"/>'), _xml('<a x="1" y="2"/>'), check_attributes=True) == []

    def test_missing_attribute_reported(self):
        messages = equal_structure(_xml('<a x="1" y="2"/>'), _xml('<a x="1"/>'), check_attributes=True)
        assert messages
        assert any('Could not find attribute "y" on node "a"' in m for m in messages)

    def test_attributes_ignored_unless_requested(self):
        assert equal_structure(_xml('<a x="1" y="2"/>'), _xml("<a/>")) == []

    def test_attribute_mismatches_do_not_stop_the_walk(self):
        expected = _xml('<a k="1"><b j="2"/></a>')
        actual = _xml("<a><b/></a>")
        mismatches = compare_structure(expected, actual, check_attributes=True)
        kinds = [m.kind for m in mismatches]
        assert kinds.count(MismatchKind.ATTRIBUTE_MISSING) == 2
        assert not any(m.fatal for m in mismatches)
        assert mismatches[-1].path == "a/b"

    def test_on_mismatch_receives_each_description(self):
        seen: list[str] = []
        result = equal_structure(
            _xml('<a p="1" q="2"/>'),
            _xml("<a/>"),
            check_attributes=True,
            on_mismatch=seen.append,
        )
        assert seen == result
        assert len(seen) == 3  # count + two missing names

    def test_built_nodes_compare_like_parsed_nodes(self):
        built = TreeNode(tag="a", children=[TreeNode(tag="b")])
        assert equal_structure(built, _xml("<a><b/></a>")) == []
