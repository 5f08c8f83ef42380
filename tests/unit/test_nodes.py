"""
Tests for the expression AST: structural equality, construction helpers
and traversal.
"""

import pytest

from dimexpand.shared.ast_visitor import ASTTransformer, children, walk
from dimexpand.shared.nodes import (
    Assign, BinaryOp, Block, Call, ForLoop, IndexAccess, Literal, RangeExpr,
    Symbol, Template, TupleExpr, as_expression, as_symbol, is_literal,
)
from dimexpand.shared.source_location import SourceLocation
from dimexpand.shared.types import BinaryOperator


class TestEquality:
    def test_equality_ignores_location(self):
        a = Symbol("x", location=SourceLocation("a.tpl", 1, 1))
        b = Symbol("x", location=SourceLocation("b.tpl", 7, 3))
        assert a == b
        assert hash(a) == hash(b)

    def test_int_and_bool_literals_differ(self):
        assert Literal(1) != Literal(True)
        assert Literal(0) != Literal(False)
        assert Literal(True).kind == "bool"
        assert Literal(3).kind == "int"

    def test_verbatim_is_part_of_identity(self):
        assert Symbol("q_x") != Symbol("q_x", verbatim=True)

    def test_different_node_kinds_differ(self):
        assert TupleExpr([Symbol("a")]) != Block([Symbol("a")])

    def test_nested_structures(self):
        left = IndexAccess(Symbol("A"), [Symbol("i1"), BinaryOp(BinaryOperator.ADD, Symbol("i2"), Literal(1))])
        right = IndexAccess(Symbol("A"), [Symbol("i1"), BinaryOp(BinaryOperator.ADD, Symbol("i2"), Literal(1))])
        assert left == right
        assert hash(left) == hash(right)

    def test_literal_rejects_non_integers(self):
        with pytest.raises(TypeError):
            Literal(1.5)
        with pytest.raises(TypeError):
            Literal("1")

    def test_empty_block_is_truthy(self):
        assert Block([])


class TestConstructionHelpers:
    def test_as_expression(self):
        assert as_expression("A") == Symbol("A")
        assert as_expression(3) == Literal(3)
        assert as_expression(True) == Literal(True)
        node = Symbol("x")
        assert as_expression(node) is node

    def test_as_expression_rejects_other_types(self):
        with pytest.raises(TypeError):
            as_expression(2.5)

    def test_as_symbol(self):
        assert as_symbol("d") == Symbol("d")
        with pytest.raises(TypeError):
            as_symbol(3)

    def test_template_accepts_binder_name(self):
        assert Template("d", Symbol("i_d")).binder == Symbol("d")

    def test_is_literal(self):
        assert is_literal(Literal(2))
        assert is_literal(Literal(2), "int")
        assert not is_literal(Literal(2), "bool")
        assert not is_literal(Symbol("x"))


class TestTraversal:
    def test_children_in_source_order(self):
        node = Call(Symbol("f"), [Symbol("a"), Literal(1)])
        assert list(children(node)) == [Symbol("f"), Symbol("a"), Literal(1)]

    def test_walk_is_preorder(self):
        node = BinaryOp(BinaryOperator.MUL, BinaryOp(BinaryOperator.ADD, Symbol("a"), Symbol("b")), Symbol("c"))
        names = [n.name for n in walk(node) if isinstance(n, Symbol)]
        assert names == ["a", "b", "c"]

    def test_transformer_copies_structurally(self):
        node = ForLoop(Symbol("i1"), RangeExpr(Literal(1), Symbol("n")), Block([Assign(Symbol("s"), Symbol("i1"))]))
        copy = ASTTransformer().transform(node)
        assert copy == node
        assert copy is not node

    def test_transformer_wraps_loop_body_in_block(self):
        class Unwrap(ASTTransformer):
            def visit_block(self, node):
                return node.exprs[0].accept(self)

        loop = ForLoop(Symbol("i1"), RangeExpr(Literal(1), Literal(3)), Block([Symbol("x")]))
        result = Unwrap().transform(loop)
        assert isinstance(result.body, Block)
        assert result.body.exprs == [Symbol("x")]

    def test_transformer_keeps_location(self):
        loc = SourceLocation("t.tpl", 2, 4)
        node = TupleExpr([Symbol("a")], location=loc)
        assert ASTTransformer().transform(node).location == loc
