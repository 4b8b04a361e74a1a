#!/usr/bin/env python3
"""
Net file I/O.

Nets, validation requests and results are stored as UTF-8 JSON using the
same camelCase keys as the wire format.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Type, TypeVar, Union

from pydantic import ValidationError

from petrisim.exceptions import InvalidArgumentError
from petrisim.models import DescriptionModel, NetDescription, ValidationRequest

logger = logging.getLogger(__name__)

M = TypeVar('M', bound=DescriptionModel)
PathLike = Union[str, Path]


def _load(path: PathLike, model: Type[M]) -> M:
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    try:
        loaded = model.model_validate_json(text)
    except ValidationError as e:
        raise InvalidArgumentError(f"{path} is not a valid {model.__name__}: {e}") from e
    logger.debug("[io] loaded %s from %s", model.__name__, path)
    return loaded


def load_net(path: PathLike) -> NetDescription:
    return _load(path, NetDescription)


def load_validation_request(path: PathLike) -> ValidationRequest:
    return _load(path, ValidationRequest)


def dump_model(model: DescriptionModel, path: PathLike) -> Path:
    """
    Write any boundary model (net, analysis or validation result) as JSON.

    Parent directories are created as needed. Returns the written path.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(model.to_json() + "\n", encoding="utf-8")
    logger.debug("[io] wrote %s to %s", type(model).__name__, path)
    return path


def dump_net(net: NetDescription, path: PathLike) -> Path:
    return dump_model(net, path)


dump_result = dump_model
