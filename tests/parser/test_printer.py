"""Snapshot tests for the indented tree printer."""

from calc.parser import Context, Literal, TreePrinter


class TestTreePrinter:
    """Test tree rendering."""

    def test_literal(self, render):
        assert render("42") == "42\n"

    def test_literal_uses_short_form(self, render):
        assert render("2.50") == "2.5\n"
        assert render("1000000") == "1e+06\n"

    def test_binary(self, render):
        assert render("1 + 2") == "+\n  1\n  2\n"

    def test_nested(self, render):
        assert render("2 * (x + 1)") == (
            "*\n"
            "  2\n"
            "  +\n"
            "    x\n"
            "    1\n"
        )

    def test_unary(self, render):
        assert render("-(a - b)") == "-\n  -\n    a\n    b\n"

    def test_function_arguments_in_order(self, render):
        assert render("max(3, y, sqrt(4))") == (
            "max\n"
            "  3\n"
            "  y\n"
            "  sqrt\n"
            "    4\n"
        )

    def test_assignment(self, render):
        assert render("total = sum(1, 2)") == (
            "total\n"
            "  sum\n"
            "    1\n"
            "    2\n"
        )

    def test_starting_indent(self, render):
        assert render("a < b", indent=2) == "    <\n      a\n      b\n"

    def test_printer_restores_level(self):
        printer = TreePrinter(Context.default(), level=1)
        printer.render(Literal(1))
        assert printer.level == 1
