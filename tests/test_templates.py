"""
Tests for code reindentation and the Jinja2 template wrapper.
"""

import io

import pytest

from bindgen.core.templates import (
    TemplateEngine,
    TemplateError,
    create_template_engine,
    format_code,
    write_code,
)


class TestFormatCode:
    def test_common_prefix_removed_and_blank_lines_kept(self):
        code = "    if (x) {\n        y();\n\n    }\n   \n    z();"
        assert format_code(code) == ["if (x) {", "    y();", "", "}", "", "z();"]

    def test_preserves_line_count(self):
        code = "\n\n    a;\n\n    b;\n"
        lines = format_code(code)
        assert len(lines) == len(code.split("\n"))
        assert lines == ["", "", "a;", "", "b;", ""]

    def test_width_comes_from_first_non_blank_line(self):
        code = "\n  first;\n      nested;\n second;"
        assert format_code(code) == ["", "first;", "    nested;", "second;"]

    def test_removal_is_clamped_to_own_whitespace(self):
        code = "        deep;\n  shallow;\nnone;"
        assert format_code(code) == ["deep;", "shallow;", "none;"]

    def test_trailing_whitespace_stripped(self):
        assert format_code("  a;   \t\n  b;  ") == ["a;", "b;"]

    def test_tabs_count_as_whitespace(self):
        assert format_code("\tfoo();\n\t\tbar();") == ["foo();", "\tbar();"]

    def test_indent_prefix_on_non_blank_lines(self):
        assert format_code("  a;\n\n  b;", indent="    ") == ["    a;", "", "    b;"]

    def test_unindented_code_is_unchanged(self):
        code = "int x = 0;\nreturn x;"
        assert format_code(code) == code.split("\n")


def test_write_code_writes_lines():
    stream = io.StringIO()
    write_code(stream, "    a;\n    b;", indent="  ")
    assert stream.getvalue() == "  a;\n  b;\n"


class TestTemplateEngine:
    def test_render_in_memory_template(self):
        engine = TemplateEngine()
        engine.add_template("greeting", "Hello {{ name }}")
        assert engine.template_exists("greeting")
        assert engine.render_template("greeting", {"name": "Widget"}) == "Hello Widget"

    def test_missing_template(self):
        engine = create_template_engine()
        assert not engine.template_exists("missing.j2")
        with pytest.raises(TemplateError):
            engine.render_template("missing.j2", {})

    def test_file_templates(self, tmp_path):
        (tmp_path / "class.j2").write_text("class {{ name }};\n", encoding="utf-8")
        engine = create_template_engine(tmp_path)
        assert engine.render_template("class.j2", {"name": "Widget"}) == "class Widget;\n"

    def test_no_html_escaping(self):
        engine = TemplateEngine()
        result = engine.render_string("{{ t }}", {"t": "Vector<int>&"})
        assert result == "Vector<int>&"

    def test_filters(self):
        engine = TemplateEngine()
        assert engine.render_string("{{ c | comment }}", {"c": "a\n\nb"}) == "// a\n\n// b"
        assert (
            engine.render_string("{{ c | indent_code(2) }}", {"c": "    x;\n      y;"})
            == "  x;\n    y;"
        )

    def test_bad_template_string(self):
        with pytest.raises(TemplateError):
            TemplateEngine().render_string("{% if %}", {})
