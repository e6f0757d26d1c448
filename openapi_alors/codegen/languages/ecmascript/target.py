"""
ECMAScript target.

Generates an untyped ``fetch`` client. The type table is empty: the
language has no static types, so every type resolves unqualified.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from ...core.config import TargetConfig, load_config
from ...core.request import RequestSyntax
from ...core.target import Target, TargetError
from ...core.templates import TemplateError, create_template_engine
from ...core.types import TypeTable
from ...core.urls import UrlSyntax
from .naming import create_ecmascript_policy, line_comment

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "api.js.j2"

ECMASCRIPT_REQUEST_SYNTAX = RequestSyntax(
    query_set="if ({var} != null) __url.searchParams.set({wire}, {var})",
    content_type='__reqBody.headers = {{ "Content-Type": {media_type} }}',
    json_body="__reqBody.body = JSON.stringify({body})",
    form_open="const __formData = new FormData()",
    form_required="__formData.append({key}, {body}.{var})",
    form_optional="if ({body}.{var} != null) __formData.append({key}, {body}.{var})",
    form_close="__reqBody.body = __formData",
)

ECMASCRIPT_URL_SYNTAX = UrlSyntax(placeholder="${{{var}}}")


def _upper(method: str) -> str:
    return method.upper()


def create_ecmascript_target(
    config: Optional[Union[TargetConfig, Dict[str, Any]]] = None,
) -> Target:
    """
    Create the ECMAScript target.

    Args:
        config: TargetConfig, or a dict of overrides on the ECMAScript defaults

    Raises:
        TargetError: If the template or reserved word list is missing
    """
    if not isinstance(config, TargetConfig):
        config = load_config("ecmascript", custom_config=config)

    try:
        templates = create_template_engine(TEMPLATE_DIR)
        templates.add_filter("literal", ECMASCRIPT_REQUEST_SYNTAX.quote)
        templates.require_template(TEMPLATE_NAME)
    except TemplateError as e:
        raise TargetError(f"ECMAScript target unavailable: {e}") from e

    return Target(
        name="ecmascript",
        file_extension=".js",
        policy=create_ecmascript_policy(),
        types=TypeTable(),
        request_syntax=ECMASCRIPT_REQUEST_SYNTAX,
        url_syntax=ECMASCRIPT_URL_SYNTAX,
        templates=templates,
        template_name=TEMPLATE_NAME,
        default_output="Generated.js",
        config=config,
        comment_style=line_comment,
        model_doc_level=0,
        field_doc_level=1,
        operation_doc_level=1,
        method_style=_upper,
    )
