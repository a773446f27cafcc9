"""
Template tags rendering tenant branding.

    {% load branding_tags %}
    {% branding_style %}
    <h1 style="color: {% brand_color 'primary' %}">...</h1>
"""

from django import template
from django.utils.html import format_html, format_html_join

from empresa_branding.branding import DEFAULT_BRANDING, Branding


register = template.Library()

COLOR_TOKENS = ("primary", "accent", "bg", "text")


def _branding_from(context) -> Branding:
    value = context.get("branding")
    if isinstance(value, Branding):
        return value

    request = context.get("request")
    value = getattr(request, "branding", None)
    if isinstance(value, Branding):
        return value

    return DEFAULT_BRANDING


@register.simple_tag(takes_context=True)
def branding_style(context):
    """Render a <style> block declaring the brand colors as CSS variables."""
    variables = _branding_from(context).css_variables()
    declarations = format_html_join(
        "", "{}: {};", ((name, value) for name, value in variables.items())
    )
    return format_html("<style>:root {{{}}}</style>", declarations)


@register.simple_tag(takes_context=True)
def brand_color(context, token):
    """Return one brand color ('primary', 'accent', 'bg' or 'text')."""
    if token not in COLOR_TOKENS:
        raise template.TemplateSyntaxError(
            f"Unknown brand color '{token}'. Expected one of {COLOR_TOKENS}"
        )
    return getattr(_branding_from(context), token)
