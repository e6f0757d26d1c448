"""
Request code synthesis.

Builds the target-language statements that attach query parameters and a
request body to an outgoing call, and the parameter list of the generated
call. Target syntax comes from a ``RequestSyntax`` record; the algorithm
is shared by every target.
"""

import json
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from ...logging_config import get_logger
from .models import Operation, ParameterObject, SchemaObject, is_parameter_object
from .naming import IdentifierPolicy, unique_name

logger = get_logger(__name__)

BODY_NAME = "body"


class ConfigurationError(Exception):
    """Raised when an operation's input is malformed and cannot be rendered."""

    pass


def json_string_literal(value: str) -> str:
    """Quote a string as a JSON string literal."""
    return json.dumps(value, ensure_ascii=False)


@dataclass(frozen=True)
class RequestSyntax:
    """
    Statement templates for one target.

    Placeholders: ``{var}`` cased variable, ``{wire}`` quoted raw parameter
    name, ``{key}`` quoted raw form property, ``{body}`` body variable,
    ``{media_type}`` quoted media type, ``{name}`` and ``{type}`` single
    parameter, ``{names}`` joined parameter names, ``{struct}`` aggregate
    type name. ``quote`` renders a string literal of the target.
    """

    query_set: str
    content_type: str
    json_body: str
    form_open: str
    form_required: str
    form_optional: str
    form_close: str
    params_empty: str = "()"
    params_single: str = "({name})"
    params_aggregate: str = "({{ {names} }})"
    params_separator: str = ", "
    quote: Callable[[str], str] = json_string_literal


def is_form_data(media_type: Optional[str]) -> bool:
    """True when a media type denotes multipart form data."""
    if not media_type:
        return False
    essence = media_type.split(";", 1)[0].strip().lower()
    return essence.endswith("form-data")


def _argument_names(
    policy: IdentifierPolicy, operation: Operation
) -> Tuple[List[Tuple[ParameterObject, str]], str]:
    """Unique argument name of every parameter object, and of the body."""
    parameters = [p for p in operation.parameters if is_parameter_object(p)]
    skipped = len(operation.parameters) - len(parameters)
    if skipped:
        logger.debug(
            "Skipping %d unresolved parameter reference(s) on %s %s",
            skipped,
            operation.method,
            operation.path,
        )

    taken = set()
    names = [""] * len(parameters)
    # Path parameters claim their names first: the route template uses them
    order = sorted(range(len(parameters)), key=lambda i: parameters[i].location != "path")
    for index in order:
        cased = policy.variable_name(parameters[index].name)
        names[index] = unique_name(cased, taken, policy.conflict_suffix)

    body_name = ""
    if operation.request_body is not None:
        body_name = unique_name(BODY_NAME, taken, policy.conflict_suffix)
    return list(zip(parameters, names)), body_name


def parameter_argument_names(policy: IdentifierPolicy, operation: Operation) -> List[str]:
    """Argument names of the parameter objects, in declaration order."""
    named, _ = _argument_names(policy, operation)
    return [name for _, name in named]


def body_argument_name(policy: IdentifierPolicy, operation: Operation) -> str:
    """Argument name of the request body, empty without a body."""
    return _argument_names(policy, operation)[1]


def build_request_statements(
    policy: IdentifierPolicy, syntax: RequestSyntax, operation: Operation
) -> List[str]:
    """
    Build statements serializing query parameters and the request body.

    Args:
        policy: Identifier policy of the target
        syntax: Statement templates of the target
        operation: Operation to render

    Returns:
        Statements in emission order

    Raises:
        ConfigurationError: If a form-data body schema has no property list
    """
    statements = []
    named, body_name = _argument_names(policy, operation)

    for parameter, name in named:
        if parameter.location != "query":
            continue
        statements.append(syntax.query_set.format(var=name, wire=syntax.quote(parameter.name)))

    body = operation.request_body
    if body is None:
        return statements

    if is_form_data(operation.request_media_type):
        statements.extend(_form_statements(policy, syntax, operation, body, body_name))
    else:
        media_type = operation.request_media_type or "application/json"
        statements.append(syntax.content_type.format(media_type=syntax.quote(media_type)))
        statements.append(syntax.json_body.format(body=body_name))

    return statements


def _form_statements(
    policy: IdentifierPolicy,
    syntax: RequestSyntax,
    operation: Operation,
    body: SchemaObject,
    body_name: str,
) -> List[str]:
    if body.properties is None:
        raise ConfigurationError(
            f"Form-data request body of {operation.method.upper()} {operation.path} "
            f"declares no properties"
        )

    statements = [syntax.form_open]
    # Declaration order, not name order
    for key in body.properties:
        template = syntax.form_required if body.is_required(key) else syntax.form_optional
        statements.append(
            template.format(
                key=syntax.quote(key), var=policy.variable_name(key), body=body_name
            )
        )
    statements.append(syntax.form_close.format(body=body_name))

    logger.debug(
        "Form body for %s %s: %d properties",
        operation.method,
        operation.path,
        len(body.properties),
    )
    return statements


def call_argument_names(policy: IdentifierPolicy, operation: Operation) -> List[str]:
    """
    Cased argument names in declaration order, body last.

    Names are unique: a later argument whose name is taken gets the
    policy's conflict suffix.
    """
    named, body_name = _argument_names(policy, operation)
    names = [name for _, name in named]
    if body_name:
        names.append(body_name)
    return names


def operation_params(
    policy: IdentifierPolicy,
    syntax: RequestSyntax,
    operation: Operation,
    struct_name: str = "",
    single_type: str = "",
) -> str:
    """
    Build the parameter list of a generated call.

    Zero arguments render empty, one renders bare and two or more collapse
    into a single aggregate parameter.
    """
    names = call_argument_names(policy, operation)

    if not names:
        return syntax.params_empty
    if len(names) == 1:
        return syntax.params_single.format(name=names[0], type=single_type)
    return syntax.params_aggregate.format(
        names=syntax.params_separator.join(names), struct=struct_name
    )
