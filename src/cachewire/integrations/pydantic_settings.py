from __future__ import annotations

import importlib
import warnings
from collections.abc import Mapping
from typing import Any

from cachewire.exceptions import CacheWireInvalidConfigError

_PYDANTIC_V1_WARNING_PATTERN = (
    r"Core Pydantic V1 functionality isn't compatible with Python 3\.14 or greater\."
)


def _load_pydantic_base() -> type[Any] | None:
    return _load_base_model("pydantic")


def _load_pydantic_v1_base() -> type[Any] | None:
    with warnings.catch_warnings():
        warnings.filterwarnings(
            "ignore",
            message=_PYDANTIC_V1_WARNING_PATTERN,
            category=UserWarning,
        )
        return _load_base_model("pydantic.v1")


def _load_base_model(module_name: str) -> type[Any] | None:
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None
    base_model = getattr(module, "BaseModel", None)
    if isinstance(base_model, type):
        return base_model
    return None


def _build_model_bases() -> tuple[type[Any], ...]:
    seen_ids: set[int] = set()
    bases: list[type[Any]] = []

    for candidate in (_load_pydantic_base(), _load_pydantic_v1_base()):
        if candidate is None:
            continue
        candidate_id = id(candidate)
        if candidate_id in seen_ids:
            continue
        seen_ids.add(candidate_id)
        bases.append(candidate)

    return tuple(bases)


MODEL_BASES: tuple[type[Any], ...] = _build_model_bases()


def is_pydantic_model(candidate: object) -> bool:
    """Return whether ``candidate`` is an instance of a Pydantic model.

    ``pydantic_settings.BaseSettings`` subclasses count as models, so a
    settings object declaring ``options`` and ``entries`` fields can be passed
    straight to ``wire_caching``. If Pydantic is not installed, this function
    returns ``False`` for every candidate.
    """
    return any(isinstance(candidate, base) for base in MODEL_BASES)


def dump_pydantic_model(model: object) -> Mapping[str, Any]:
    """Dump a Pydantic model instance to plain data.

    Uses ``model_dump`` on Pydantic v2 models and ``dict`` on v1 models.

    Raises:
        CacheWireInvalidConfigError: If ``model`` is not a Pydantic model.

    """
    if not is_pydantic_model(model):
        msg = f"Expected a Pydantic model instance, got {type(model).__name__}."
        raise CacheWireInvalidConfigError(msg)
    model_dump = getattr(model, "model_dump", None)
    if callable(model_dump):
        return model_dump()
    return model.dict()  # type: ignore[attr-defined]


__all__ = [
    "MODEL_BASES",
    "dump_pydantic_model",
    "is_pydantic_model",
]
