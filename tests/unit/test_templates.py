"""Tests for TemplateRenderer: context fields and error reporting."""

from __future__ import annotations

import pytest

from artiforge.core.errors import ConfigurationError, TemplateError
from artiforge.core.templates import TemplateRenderer


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer(
        {"project_name": "binary", "version": "1.2.3", "env": {"FOO": "bar"}}
    )


class TestTemplateRenderer:
    def test_render_fields(self, renderer: TemplateRenderer):
        out = renderer.render("{{ project_name }}_{{ env.FOO }}_checksums.txt")
        assert out == "binary_bar_checksums.txt"

    def test_plain_string(self, renderer: TemplateRenderer):
        assert renderer.render("checksums.txt") == "checksums.txt"

    def test_failing_expression(self, renderer: TemplateRenderer):
        with pytest.raises(TemplateError, match=r"^template: tmpl: "):
            renderer.render("{{ version + 1 }}")

    def test_filter_error(self, renderer: TemplateRenderer):
        with pytest.raises(TemplateError, match="nosuchfilter"):
            renderer.render("{{ version | nosuchfilter }}")

    def test_undefined_env_key(self, renderer: TemplateRenderer):
        with pytest.raises(TemplateError, match="NOPE"):
            renderer.render("{{ env.NOPE }}")

    def test_syntax_error_reports_line(self, renderer: TemplateRenderer):
        with pytest.raises(TemplateError, match=r"^template: tmpl:1: "):
            renderer.render("{{ project_name }_checksums.txt")

    def test_template_error_is_configuration_error(self, renderer: TemplateRenderer):
        with pytest.raises(ConfigurationError):
            renderer.render("{{ missing }}")

    def test_render_all(self, renderer: TemplateRenderer):
        assert renderer.render_all(["{{ version }}", "x"]) == ["1.2.3", "x"]
