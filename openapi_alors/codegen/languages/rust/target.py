"""
Rust target.

Generates serde models and an async reqwest client, plus a JSON dump of
the generation context for debugging.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from ...core.config import TargetConfig, load_config
from ...core.request import RequestSyntax
from ...core.target import Target, TargetError
from ...core.templates import TemplateError, create_template_engine
from ...core.urls import UrlSyntax
from .naming import create_rust_policy, doc_comment, string_literal
from .types import create_rust_type_table

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "api.rs.j2"

RUST_REQUEST_SYNTAX = RequestSyntax(
    query_set=(
        "if let Some(value) = &{var} {{ __query.push(({wire}, value.to_string())); }}"
    ),
    content_type='__req = __req.header("Content-Type", {media_type});',
    json_body="__req = __req.body(serde_json::to_string(&{body})?);",
    form_open="let mut __form = reqwest::multipart::Form::new();",
    form_required="__form = __form.text({key}, {body}.{var}.to_string());",
    form_optional=(
        "if let Some(value) = &{body}.{var} {{ __form = __form.text({key}, value.to_string()); }}"
    ),
    form_close="__req = __req.multipart(__form);",
    params_empty="(&self)",
    params_single="(&self, {name}: {type})",
    params_aggregate="(&self, {struct} {{ {names} }}: {struct})",
    quote=string_literal,
)

RUST_URL_SYNTAX = UrlSyntax(placeholder="{{{var}}}")


def _option(type_expr: str) -> str:
    return f"Option<{type_expr}>"


def create_rust_target(
    config: Optional[Union[TargetConfig, Dict[str, Any]]] = None,
) -> Target:
    """
    Create the Rust target.

    Args:
        config: TargetConfig, or a dict of overrides on the Rust defaults

    Raises:
        TargetError: If the template or reserved word list is missing
    """
    if not isinstance(config, TargetConfig):
        config = load_config("rust", custom_config=config)

    try:
        templates = create_template_engine(TEMPLATE_DIR)
        templates.add_filter("literal", RUST_REQUEST_SYNTAX.quote)
        templates.require_template(TEMPLATE_NAME)
    except TemplateError as e:
        raise TargetError(f"Rust target unavailable: {e}") from e

    return Target(
        name="rust",
        file_extension=".rs",
        policy=create_rust_policy(),
        types=create_rust_type_table(),
        request_syntax=RUST_REQUEST_SYNTAX,
        url_syntax=RUST_URL_SYNTAX,
        templates=templates,
        template_name=TEMPLATE_NAME,
        default_output="generated.rs",
        config=config,
        comment_style=doc_comment,
        model_doc_level=1,
        field_doc_level=2,
        operation_doc_level=1,
        optional_style=_option,
        hashable=True,
        fallback_type="serde_json::Value",
    )
