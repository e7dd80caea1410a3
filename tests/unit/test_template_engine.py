# Copyright (c) 2026 TaskPrompt Contributors. All Rights Reserved.
"""Unit tests for the template engine."""

import pytest

from taskprompt.kernel.template_engine import (
    TemplateEngine,
    default_engine,
    format_value,
    render,
)


class TestRender:
    def test_single_brace(self):
        assert render("Hello {name}", {"name": "TemplateLoader"}) == "Hello TemplateLoader"

    def test_double_brace(self):
        assert render("Hello {{name}}!", {"name": "World"}) == "Hello World!"

    def test_double_brace_with_spaces(self):
        assert render("Hello {{ name }}!", {"name": "World"}) == "Hello World!"

    def test_mixed_formats(self):
        result = render("{{name}} - {{ age }} - {city}", {"name": "Bob", "age": 30, "city": "NYC"})
        assert result == "Bob - 30 - NYC"

    def test_missing_key_left_verbatim(self):
        assert render("{missing}", {}) == "{missing}"
        assert render("Hello {{name}}, {{missing}} token!", {"name": "World"}) == (
            "Hello World, {{missing}} token!"
        )

    def test_no_context_returns_template(self):
        assert render("Hello {{name}}!") == "Hello {{name}}!"
        assert render("Hello {{name}}!", None) == "Hello {{name}}!"

    def test_repeated_tokens(self):
        assert render("{x}{x}{{x}}", {"x": "a"}) == "aaa"

    def test_values_not_rescanned(self):
        assert render("{expr}", {"expr": "{{nested}}", "nested": "boom"}) == "{{nested}}"
        assert render("{a}", {"a": "{b}", "b": "{a}"}) == "{b}"

    def test_non_identifier_braces_untouched(self):
        template = 'Return JSON like {"key": 1} or { spaced }'
        assert render(template, {"key": "x", "spaced": "y"}) == template

    def test_any_context_key_is_a_placeholder(self):
        assert render("{名前} {task id}", {"名前": "A", "task id": "B"}) == "A B"
        assert render("{{ task id }} / {{名前}}", {"名前": "A", "task id": "B"}) == "B / A"

    def test_keys_sharing_a_prefix(self):
        assert render("{a} {ab} {{abc}}", {"a": 1, "ab": 2, "abc": 3}) == "1 2 3"

    def test_regex_metacharacters_in_keys(self):
        assert render("{a.b} {x|y} {(z)}", {"a.b": "1", "x|y": "2", "(z)": "3"}) == "1 2 3"
        assert render("{aXb}", {"a.b": "1"}) == "{aXb}"

    def test_special_characters_not_escaped(self):
        value = '<script>alert("xss")</script>'
        assert render("Value: {{value}}", {"value": value}) == f"Value: {value}"

    def test_empty_template(self):
        assert render("", {"key": "value"}) == ""

    @pytest.mark.parametrize("bad", [None, 42, {}, []])
    def test_non_string_template(self, bad):
        with pytest.raises(TypeError, match="Template must be a string"):
            render(bad)

    def test_many_parameters(self):
        params = {f"key{i}": i for i in range(1000)}
        template = "".join(f"{{{{key{i}}}}}," for i in range(1000))
        result = render(template, params)
        assert result.startswith("0,1,2,")
        assert result.endswith("999,")

    def test_pure(self):
        ctx = {"name": "A"}
        assert render("{name}", ctx) == render("{name}", ctx)
        assert ctx == {"name": "A"}


class TestFormatValue:
    def test_numbers(self):
        assert format_value(42) == "42"
        assert format_value(-3) == "-3"
        assert format_value(2.0) == "2"
        assert format_value(0.5) == "0.5"

    def test_small_floats_in_plain_decimal(self):
        assert format_value(1e-7) == "0.0000001"
        assert format_value(1.5e-5) == "0.000015"
        assert format_value(-2.5e-6) == "-0.0000025"

    def test_large_floats_in_plain_decimal(self):
        assert format_value(1e20) == "100000000000000000000"
        assert format_value(1.5e16) == "15000000000000000"

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_floats_rejected(self, value):
        with pytest.raises(TypeError, match="Unsupported context value type"):
            format_value(value)
        with pytest.raises(TypeError, match="Unsupported context value type"):
            render("{x}", {"x": value})

    def test_booleans(self):
        assert format_value(True) == "true"
        assert format_value(False) == "false"

    def test_none_is_empty(self):
        assert format_value(None) == ""
        assert render("Hello {{name}}!", {"name": None}) == "Hello !"

    def test_unsupported_type(self):
        with pytest.raises(TypeError, match="Unsupported context value type"):
            render("{items}", {"items": [1, 2, 3]})


class TestTemplateEngine:
    def test_render_delegates(self):
        engine = TemplateEngine()
        assert engine.render("# {{title}}", {"title": "Tasks"}) == "# Tasks"

    def test_render_batch(self):
        results = default_engine.render_batch([
            ("Name: {{name}}", {"name": "Alice"}),
            ("Age: {{age}}", {"age": 30}),
            ("Plain", None),
        ])
        assert results == ["Name: Alice", "Age: 30", "Plain"]

    def test_composition(self):
        partial = default_engine.render("Task: {{taskName}}", {"taskName": "Deploy"})
        full = default_engine.render("{{header}}\n{{body}}", {"header": "# Tasks", "body": partial})
        assert full == "# Tasks\nTask: Deploy"
