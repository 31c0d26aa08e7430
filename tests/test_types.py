"""
Test suite for Quill runtime values.

This module tests:
- Expression node equality and immutability
- Function arity checking
- Method-call desugaring and record dispatch
- Runtime error types
"""

import dataclasses
import unittest
from decimal import Decimal

from quill.reader.reader import read_str
from quill.reader.reader_macros import method_call, tuple_form
from quill.runtime.errors import ArityError, WrongTypeError
from quill.runtime.types import (
    Bool,
    Function,
    List,
    MethodCall,
    Num,
    Quote,
    Record,
    String,
    Symbol,
    get_record,
    type_name,
)


class Stack(Record):
    """Minimal record used to observe method dispatch."""

    def __init__(self):
        self.calls = []

    def call_method(self, name, args, symbol_table):
        self.calls.append((name, args, symbol_table))
        if name == "fail":
            raise KeyError("no such method")
        return Num(len(args))


class TestNodes(unittest.TestCase):
    """Test expression node behaviour."""

    def test_list_and_quote_are_distinct(self):
        items = [Symbol("a"), Symbol("b")]
        self.assertNotEqual(List(items), Quote(items))
        self.assertEqual(List(items), List(tuple(items)))

    def test_nodes_are_immutable(self):
        form = List([Symbol("a")])
        with self.assertRaises(dataclasses.FrozenInstanceError):
            form.items = ()
        with self.assertRaises(dataclasses.FrozenInstanceError):
            Symbol("a").name = "b"

    def test_num_compares_by_value(self):
        self.assertEqual(Num(Decimal("1.0")), Num(Decimal("1")))
        self.assertEqual(Num("0.1"), Num(Decimal("0.1")))
        self.assertEqual(hash(Num(Decimal("1.0"))), hash(Num(Decimal("1"))))

    def test_sequence_protocol(self):
        form = List([Symbol("a"), Num("1")])
        self.assertEqual(len(form), 2)
        self.assertEqual(form[0], Symbol("a"))
        self.assertEqual(list(form), [Symbol("a"), Num("1")])
        self.assertEqual(len(Quote()), 0)

    def test_type_name(self):
        self.assertEqual(type_name(Num("1")), "Num")
        self.assertEqual(type_name(String("x")), "String")
        self.assertEqual(type_name(Stack()), "Stack")


class TestFunction(unittest.TestCase):
    """Test Function arity checks."""

    def test_exact_arity(self):
        fn = Function("pair", 2, False, lambda args, env: List(args))
        self.assertEqual(fn.call([Num("1"), Num("2")]), List([Num("1"), Num("2")]))
        with self.assertRaises(ArityError):
            fn.call([Num("1")])
        with self.assertRaises(ArityError):
            fn.call([Num("1"), Num("2"), Num("3")])

    def test_variadic_arity(self):
        fn = Function("count", 1, True, lambda args, env: Num(len(args)))
        self.assertEqual(fn.call([Bool(True)] * 5), Num(5))
        with self.assertRaises(ArityError) as cm:
            fn.call([])
        self.assertIn("at least 1", str(cm.exception))

    def test_symbol_table_passed_through(self):
        seen = []
        fn = Function("f", 0, True, lambda args, env: seen.append(env))
        table = object()
        fn.call([], table)
        self.assertIs(seen[0], table)


class TestMethodCall(unittest.TestCase):
    """Test the callable built for .method symbols."""

    def test_shape(self):
        fn = method_call("push")
        self.assertEqual(fn.name, "method_call<push>")
        self.assertEqual(fn.minimum_args, 1)
        self.assertTrue(fn.variadic)
        self.assertEqual(fn.func, MethodCall("push"))

    def test_read_dot_symbol(self):
        (fn,) = read_str(".foo")
        self.assertIsInstance(fn, Function)
        self.assertNotIsInstance(fn, Symbol)
        self.assertEqual(fn, method_call("foo"))

    def test_dispatches_to_record(self):
        stack = Stack()
        table = {"x": Num("1")}
        result = method_call("push").call([stack, Num("1"), String("a")], table)
        self.assertEqual(result, Num(2))
        self.assertEqual(stack.calls, [("push", (Num("1"), String("a")), table)])

    def test_record_only_argument(self):
        stack = Stack()
        self.assertEqual(method_call("len").call([stack]), Num(0))
        self.assertEqual(stack.calls, [("len", (), None)])

    def test_non_record_is_wrong_type(self):
        with self.assertRaises(WrongTypeError) as cm:
            method_call("push").call([Num("1"), Num("2")])
        self.assertEqual(cm.exception.expected, "Record")
        self.assertEqual(cm.exception.given, "Num")

    def test_same_error_as_get_record(self):
        with self.assertRaises(WrongTypeError) as direct:
            get_record(String("s"))
        with self.assertRaises(WrongTypeError) as via_call:
            method_call("m").call([String("s")])
        self.assertEqual(str(direct.exception), str(via_call.exception))

    def test_record_errors_propagate_unchanged(self):
        with self.assertRaises(KeyError):
            method_call("fail").call([Stack()])

    def test_no_arguments(self):
        with self.assertRaises(ArityError):
            method_call("push").call([])
        with self.assertRaises(ArityError):
            MethodCall("push")((), None)

    def test_in_application(self):
        (form,) = read_str("(.push stack 1)")
        self.assertEqual(form[0], method_call("push"))
        self.assertEqual(form[1:], (Symbol("stack"), Num("1")))


class TestTupleForm(unittest.TestCase):
    def test_tuple_form(self):
        self.assertEqual(
            tuple_form([Num("1"), Symbol("b")]),
            List([Symbol("tuple"), Num("1"), Symbol("b")]),
        )


if __name__ == "__main__":
    unittest.main()
