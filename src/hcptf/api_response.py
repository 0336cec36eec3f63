"""Rendering of untyped JSON:API responses as tables or key/value views.

Responses are decoded into plain ``json`` values and inspected shape by shape:
a ``data`` array of resource objects becomes a table with ``ID``, ``Type`` and one
column per attribute of the first resource; anything else falls back to a
key/value view. No shape is treated as an error.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple, Union

if TYPE_CHECKING:
    from hcptf.output import Formatter

from hcptf.errors import ResponseParseError

log = logging.getLogger(__name__)

JsonValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]

PLACEHOLDER = "-"


@dataclass(frozen=True)
class RenderSettings:
    placeholder: str = PLACEHOLDER
    empty_header: str = "Message"
    empty_message: str = "No data returned"
    id_header: str = "ID"
    type_header: str = "Type"


DEFAULT_RENDER_SETTINGS = RenderSettings()


@dataclass(frozen=True)
class TableRendering:
    headers: List[str]
    rows: List[List[str]]


@dataclass(frozen=True)
class KeyValueRendering:
    data: Dict[str, Any]


@dataclass(frozen=True)
class JsonRendering:
    value: JsonValue


Rendering = Union[TableRendering, KeyValueRendering, JsonRendering]


def parse_api_response(body: bytes) -> JsonValue:
    """Decode a raw response body.

    Raises:
        ResponseParseError: the body is not valid UTF-8 JSON, holds an integer too long
            to convert, or nests too deeply to decode.
    """
    try:
        return json.loads(body)
    except (ValueError, RecursionError) as e:
        raise ResponseParseError(str(e)) from e


def to_printable(value: JsonValue, settings: RenderSettings = DEFAULT_RENDER_SETTINGS) -> str:
    """Convert one decoded JSON value into a single-line cell string.

    ``None`` becomes the placeholder. Booleans use their JSON spelling, objects and
    arrays a compact JSON form. Surrounding whitespace is trimmed and any line
    breaks left inside the value are folded into spaces.
    """
    if value is None:
        return settings.placeholder
    if isinstance(value, bool):
        text = "true" if value else "false"
    elif isinstance(value, (dict, list)):
        text = json.dumps(value, ensure_ascii=False)
    else:
        text = str(value)
    return " ".join(text.strip("\n").strip().splitlines())


def extract_sorted_attributes(item: Dict[str, Any]) -> List[str]:
    """Return the attribute names of a resource object in ascending order.

    Resources without an ``attributes`` mapping have no attribute columns.
    """
    attributes = item.get("attributes")
    if not isinstance(attributes, dict):
        return []
    return sorted(attributes)


def api_data_rows(
    data: JsonValue, settings: RenderSettings = DEFAULT_RENDER_SETTINGS
) -> Optional[Tuple[List[str], List[List[str]]]]:
    """Build table headers and rows from a JSON:API ``data`` array.

    Returns None when the value cannot be tabulated: it is not an array, or its
    first element is not an object.

    Columns are ``ID``, ``Type`` and the sorted attribute names of the first
    element. Later elements are rendered against those same columns, so an
    attribute that only appears in later elements gets no column. Elements that
    are not objects are skipped.
    """
    if not isinstance(data, list):
        return None

    if not data:
        return [settings.empty_header], [[settings.empty_message]]

    first_item = data[0]
    if not isinstance(first_item, dict):
        return None

    attributes = extract_sorted_attributes(first_item)
    headers = [settings.id_header, settings.type_header, *attributes]

    rows: List[List[str]] = []
    for item in data:
        if not isinstance(item, dict):
            log.debug("Skipping non-object element in data array: %r", type(item).__name__)
            continue

        attrs = item.get("attributes")
        if not isinstance(attrs, dict):
            attrs = {}

        row = [to_printable(item.get("id"), settings), to_printable(item.get("type"), settings)]
        row.extend(to_printable(attrs.get(attr), settings) for attr in attributes)
        rows.append(row)

    return headers, rows


def render_api_response(
    response: JsonValue,
    output_format: str = "table",
    settings: RenderSettings = DEFAULT_RENDER_SETTINGS,
) -> Rendering:
    """Decide how a decoded response is handed to the output sink.

    - json output, or no response at all: the value as is
    - object with a ``data`` key: a table of ``data`` if it tabulates, else the whole object as key/values
    - bare array: a table if it tabulates, else its length and contents as key/values
    - anything else: key/values (objects as is, scalars under a ``response`` label)
    """
    if output_format == "json" or response is None:
        return JsonRendering(response)

    if isinstance(response, dict):
        if "data" in response:
            table = api_data_rows(response["data"], settings)
            if table is not None:
                return TableRendering(*table)
        return KeyValueRendering(response)

    if isinstance(response, list):
        table = api_data_rows(response, settings)
        if table is not None:
            return TableRendering(*table)
        return KeyValueRendering({"count": len(response), "response": response})

    return KeyValueRendering({"response": response})


def print_api_response(
    formatter: Formatter, response: JsonValue, settings: RenderSettings = DEFAULT_RENDER_SETTINGS
) -> None:
    rendering = render_api_response(response, formatter.output_format, settings)
    if isinstance(rendering, TableRendering):
        formatter.table(rendering.headers, rendering.rows)
    elif isinstance(rendering, KeyValueRendering):
        formatter.key_value(rendering.data)
    else:
        formatter.json(rendering.value)
