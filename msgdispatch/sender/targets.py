"""Resolve loosely typed destinations into canonical targets."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Sequence, Union

from msgdispatch.errors import EmptyTargetError, MissingCategoryError
from msgdispatch.messages.models import Target
from msgdispatch.types import TargetType

logger = logging.getLogger(__name__)

SingleTargetInput = Union[str, Target, Mapping[str, Any]]
TargetInput = Union[SingleTargetInput, Sequence[SingleTargetInput]]


def resolve_target(
    target: TargetInput, category: TargetType | str | None = None,
) -> Target | list[Target]:
    """Turn an id string, a structured target, or a list of either into canonical form.

    A bare id string takes ``category``; a structured target keeps its own
    ``type`` and ignores it. Lists resolve element by element, in order.
    """
    if isinstance(target, (list, tuple)):
        return [_resolve_one(t, category) for t in target]
    return _resolve_one(target, category)


def _resolve_one(target: SingleTargetInput, category: TargetType | str | None) -> Target:
    if isinstance(target, str):
        if not category:
            raise MissingCategoryError(target)
        return Target.from_identifier(category, target)

    if not isinstance(target, Target):
        if not target.get("type"):
            identifier = target.get("id") or target.get("ids")
            raise MissingCategoryError(str(identifier), "is missing the 'type' field (private or channel)")
        target = Target.model_validate(dict(target))

    if target.ids is not None and target.id:
        # Older callers passed a single id next to the list; fold it in
        logger.warning("Target has both id and ids; appending id %s to ids", target.id)
        target = target.model_copy(update={"ids": [*target.ids, target.id]})

    if not target.ids and not target.id:
        raise EmptyTargetError()
    return target
