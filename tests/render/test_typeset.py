"""Tests for ``termdict.render.typeset`` — the math engine hook."""

from __future__ import annotations

from termdict.render.content import render
from termdict.render.typeset import typeset


def _engine(formula: str, display: bool) -> str:
    tag = "div" if display else "span"
    return f'<{tag} class="katex">{formula}</{tag}>'


class TestTypeset:
    def test_every_segment_is_replaced(self):
        plan = render("Force ($F$) equals mass times acceleration: $$F = ma$$")
        html = typeset(plan, _engine)

        assert '<span class="katex">F</span>' in html
        assert '<div class="katex">F = ma</div>' in html
        assert "data-math-id" not in html

    def test_engine_receives_display_flag(self):
        seen: list[tuple[str, bool]] = []

        def engine(formula, display):
            seen.append((formula, display))
            return ""

        typeset(render("$a$ then $$b$$"), engine)
        assert seen == [("a", False), ("b", True)]

    def test_failing_segment_degrades_to_escaped_formula(self):
        def engine(formula, display):
            if formula.startswith("\\bad"):
                raise ValueError("parse error")
            return _engine(formula, display)

        html = typeset(render("$\\bad <x>$ and $ok$"), engine)

        assert "\\bad &lt;x&gt;" in html
        assert '<span class="katex">ok</span>' in html

    def test_plan_without_math_is_unchanged(self):
        plan = render("just *text*")
        assert typeset(plan, _engine) == plan.html_body
