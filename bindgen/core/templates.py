"""
Template and code-text utilities.

Wraps Jinja2 for file templates used by concrete generators and
provides format_code() to normalise the indentation of code snippets
before they are written into generated files.
"""

import re
from pathlib import Path
from typing import Any, Dict, List, Optional, TextIO

from jinja2 import DictLoader, Environment, FileSystemLoader, TemplateNotFound


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


_NON_SPACE = re.compile(r"\S")


def format_code(code: str, indent: str = "") -> List[str]:
    """
    Reindent a code snippet.

    The leading whitespace width of the first non-blank line is removed
    from every non-blank line (never more than the line's own leading
    whitespace). Blank lines come out empty. Line order and count are
    preserved.

    Args:
        code: Snippet, possibly indented as it appeared in a type system file
        indent: Prefix added to every non-blank output line

    Returns:
        Output lines without line terminators
    """
    lines = code.split("\n")

    spaces_to_remove = 0
    for line in lines:
        if line.strip():
            match = _NON_SPACE.search(line)
            spaces_to_remove = match.start() if match else 0
            break

    result = []
    for line in lines:
        if not line.strip():
            result.append("")
            continue
        line = line.rstrip()
        limit = 0
        while limit < spaces_to_remove and line[limit].isspace():
            limit += 1
        result.append(indent + line[limit:])
    return result


def write_code(stream: TextIO, code: str, indent: str = "") -> TextIO:
    """Write a reindented snippet to a text stream."""
    for line in format_code(code, indent):
        stream.write(line + "\n")
    return stream


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
        """
        self.template_dir = template_dir
        self._env = None
        self._setup_environment()

    def _setup_environment(self):
        """Setup Jinja2 environment with code generation utilities."""
        if self.template_dir and self.template_dir.exists():
            loader = FileSystemLoader(str(self.template_dir))
        else:
            # Use in-memory templates
            loader = DictLoader({})

        self._env = Environment(
            loader=loader,
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

        self._env.filters["indent_code"] = self._indent_filter
        self._env.filters["comment"] = self._comment_filter

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(
                f"Failed to render template {template_name}: {str(e)}"
            ) from e

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        """Render a template string with the given context."""
        try:
            template = self._env.from_string(template_string)
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template string: {str(e)}") from e

    def add_template(self, name: str, content: str):
        """
        Add an in-memory template.

        Args:
            name: Template name
            content: Template content
        """
        if not isinstance(self._env.loader, DictLoader):
            # Convert to DictLoader to support in-memory templates
            self._env.loader = DictLoader({})

        self._env.loader.mapping[name] = content

    def template_exists(self, template_name: str) -> bool:
        """Check if a template can be loaded."""
        try:
            self._env.get_template(template_name)
        except TemplateNotFound:
            return False
        return True

    # Template filters for code generation

    def _indent_filter(self, value: str, spaces: int = 4) -> str:
        """Reindent a snippet and indent it by the given number of spaces."""
        return "\n".join(format_code(str(value), " " * spaces))

    def _comment_filter(self, value: str, style: str = "//") -> str:
        """Add comment markers to each line."""
        lines = str(value).split("\n")
        return "\n".join(f"{style} {line}" if line.strip() else line for line in lines)


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine, file based when a directory is given."""
    return TemplateEngine(template_dir)
