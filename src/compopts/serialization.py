"""
Serialization of dialog payloads.

The dialog only speaks JSON-like data: text, numbers, booleans and
objects. Options Maps and Update Results go out through the `*_to_*`
functions; Update Requests come in through `request_from_*`, which
check the shape before anything touches the document.
"""
from __future__ import annotations

import json
import math
from typing import Any, Dict

import yaml

from compopts.projector import OptionsMap
from compopts.units import Length
from compopts.writer import KeyResult, UpdateRequest, UpdateResult


class PayloadError(ValueError):
    """Raised when a dialog payload does not have the expected shape."""
    pass


def _scalar_out(value: Any) -> Any:
    if isinstance(value, Length):
        return float(value)
    return value


def options_to_dict(options: OptionsMap) -> Dict[str, Dict[str, Any]]:
    return {
        dict_name: {key: _scalar_out(value) for key, value in attributes.items()}
        for dict_name, attributes in options.items()
    }


def options_to_json(options: OptionsMap) -> str:
    return json.dumps(options_to_dict(options))


def options_to_yaml(options: OptionsMap) -> str:
    return yaml.safe_dump(options_to_dict(options), sort_keys=False)


def _check_value(dict_name: str, key: Any, value: Any) -> None:
    if not isinstance(key, str) or key == "":
        raise PayloadError(f"Attribute keys in '{dict_name}' must be non-empty strings, got {key!r}")
    if isinstance(value, bool) or isinstance(value, str):
        return
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            raise PayloadError(f"Value for {dict_name}/{key} is not a finite number")
        return
    raise PayloadError(
        f"Value for {dict_name}/{key} must be text, number or boolean, got {type(value).__name__}"
    )


def request_from_dict(d: Any) -> UpdateRequest:
    if not isinstance(d, dict):
        raise PayloadError(f"Update request must be an object, got {type(d).__name__}")

    request: UpdateRequest = {}
    for dict_name, attributes in d.items():
        if not isinstance(dict_name, str) or dict_name == "":
            raise PayloadError(f"Dictionary names must be non-empty strings, got {dict_name!r}")
        if not isinstance(attributes, dict):
            raise PayloadError(f"Attributes of '{dict_name}' must be an object")
        for key, value in attributes.items():
            _check_value(dict_name, key, value)
        request[dict_name] = dict(attributes)
    return request


def request_from_json(s: str) -> UpdateRequest:
    try:
        d = json.loads(s)
    except json.JSONDecodeError as e:
        raise PayloadError(f"Invalid JSON payload: {e}")
    return request_from_dict(d)


def request_from_yaml(s: str) -> UpdateRequest:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise PayloadError(f"Invalid YAML payload: {e}")
    return request_from_dict(d)


def key_result_to_dict(r: KeyResult) -> Dict[str, Any]:
    return {
        "dictionary": r.dictionary,
        "key": r.key,
        "outcome": r.outcome.value,
        "value": _scalar_out(r.value),
        "error": r.error,
    }


def result_to_dict(r: UpdateResult) -> Dict[str, Any]:
    return {
        "success": r.success,
        "results": [key_result_to_dict(k) for k in r.results],
    }


def result_to_json(r: UpdateResult) -> str:
    return json.dumps(result_to_dict(r))
