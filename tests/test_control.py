"""Control-marker classification and block scanning tests."""

from uhmlx.ast import Element, Expression
from uhmlx.resolver.control import (
    ElseIfMarker,
    ElseMarker,
    EndForMarker,
    EndIfMarker,
    ForMarker,
    IfMarker,
    classify_marker,
    find_conditional_block,
    find_end_for,
    is_malformed_loop_header,
)


def _expr(text):
    return Expression(content=text)


def test_classify_markers() -> None:
    assert classify_marker("for item in data.items") == ForMarker(var="item", source="data.items")
    assert classify_marker("end for") == EndForMarker()
    assert classify_marker("if user.active") == IfMarker(condition="user.active")
    assert classify_marker("else if user.admin") == ElseIfMarker(condition="user.admin")
    assert classify_marker("else") == ElseMarker()
    assert classify_marker("end if") == EndIfMarker()


def test_bindings_are_not_markers() -> None:
    assert classify_marker("item.Name") is None
    assert classify_marker("format") is None
    assert classify_marker("iffy") is None


def test_malformed_loop_header_is_not_a_marker(caplog) -> None:
    assert classify_marker("for item") is None
    assert is_malformed_loop_header(_expr("for item"))
    assert not is_malformed_loop_header(_expr("for item in rows"))
    assert not is_malformed_loop_header(_expr("format"))
    assert not is_malformed_loop_header(Element("for"))
    assert caplog.text == ""


def test_find_end_for_skips_nested_loops() -> None:
    nodes = [
        _expr("for a in rows"),
        Element("Row"),
        _expr("for b in a.cells"),
        Element("Cell"),
        _expr("end for"),
        _expr("end for"),
    ]
    assert find_end_for(nodes, 0) == 5
    assert find_end_for(nodes, 2) == 4


def test_find_end_for_missing_terminator() -> None:
    assert find_end_for([_expr("for a in rows"), Element("Row")], 0) == -1


def test_conditional_block_dividers() -> None:
    nodes = [
        _expr("if a"),
        Element("A"),
        _expr("else if b"),
        Element("B"),
        _expr("else"),
        Element("C"),
        _expr("end if"),
    ]
    block = find_conditional_block(nodes, 0)
    assert [(divider.kind, divider.index, divider.condition) for divider in block.dividers] == [
        ("if", 0, "a"),
        ("else-if", 2, "b"),
        ("else", 4, None),
    ]
    assert block.end_index == 6
    assert list(block.branch_range(1)) == [3]
    assert list(block.branch_range(2)) == [5]


def test_conditional_block_skips_nested_chains() -> None:
    nodes = [
        _expr("if a"),
        _expr("if inner"),
        Element("X"),
        _expr("else"),
        Element("Y"),
        _expr("end if"),
        _expr("else"),
        Element("Z"),
        _expr("end if"),
    ]
    block = find_conditional_block(nodes, 0)
    assert [divider.index for divider in block.dividers] == [0, 6]
    assert block.end_index == 8
    assert list(block.branch_range(0)) == [1, 2, 3, 4, 5]


def test_conditional_block_without_end_if() -> None:
    nodes = [_expr("if a"), Element("A"), _expr("else"), Element("B")]
    assert find_conditional_block(nodes, 0) is None
