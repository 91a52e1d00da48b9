"""
Template Renderer - fills {{placeholder}} tokens in email templates

Grammar, applied in two passes:

1. Conditional blocks, never nested::

       {{#if key}}shown when key is truthy{{/if}}
       {{#if key}}shown when truthy{{else}}shown otherwise{{/if key}}

   A value counts as truthy when it is truthy in Python and its string
   form is not blank. Delimiters are always removed.

2. Placeholders ``{{ key }}``. Keys present in ``data`` are replaced by the
   value's string form (strings and numbers only, anything else becomes
   an empty string). Keys absent from ``data`` are left untouched.

Values are inserted verbatim, no HTML escaping is applied.
"""
import re

CONDITIONAL_PATTERN = re.compile(
    r"\{\{#if\s+([A-Za-z0-9_]+)\s*\}\}(.*?)(?:\{\{else\}\}(.*?))?\{\{/if(?:\s+[A-Za-z0-9_]+)?\s*\}\}",
    re.DOTALL,
)
PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([A-Za-z0-9_]+)\s*\}\}")


def is_truthy(value) -> bool:
    """Truthiness used by conditional blocks"""
    return bool(value) and str(value).strip() != ""


def format_value(value) -> str:
    # bool is a subclass of int but only makes sense as a condition flag
    if isinstance(value, bool):
        return ""
    if isinstance(value, (str, int, float)):
        return str(value)
    return ""


def render_conditionals(template: str, data: dict) -> str:
    def _resolve(match):
        key, if_content, else_content = match.group(1), match.group(2), match.group(3)
        if is_truthy(data.get(key)):
            return if_content
        return else_content or ""

    return CONDITIONAL_PATTERN.sub(_resolve, template)


def render_placeholders(template: str, data: dict) -> str:
    def _substitute(match):
        key = match.group(1)
        if key not in data:
            return match.group(0)
        return format_value(data[key])

    return PLACEHOLDER_PATTERN.sub(_substitute, template)


def render(template: str, data: dict) -> str:
    """
    Render a template string against a data mapping

    Args:
        template: Subject or body containing {{key}} tokens
        data: Mapping of placeholder names to values

    Returns:
        The rendered string
    """
    if not template:
        return ""
    data = data or {}
    return render_placeholders(render_conditionals(template, data), data)
