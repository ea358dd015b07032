"""Builds the ``x-smtpapi`` metadata header sent alongside a mail request."""

import json
from enum import Enum
from typing import Any, Optional, Sequence


def _template_fragment(template_id: str) -> dict[str, Any]:
    return {
        "filters": {
            "templates": {
                "settings": {
                    "template_id": template_id,
                    "enable": 1,
                }
            }
        }
    }


def merge_metadata(
    template_id: Optional[str],
    categories: Sequence[Any],
    unsubscribe_group_id: Optional[int],
    unsubscribe_group_ids: Sequence[int],
    custom_metadata: Optional[dict[str, Any]],
) -> Optional[dict[str, Any]]:
    """Merge the metadata sources into one ``x-smtpapi`` object.

    The custom object is applied first and the derived fragments (template,
    categories, single unsubscribe group, preference-page groups) are laid
    over it in that order, so a derived key always replaces a custom key of
    the same name. The merge is shallow: top-level keys only.

    Args:
        template_id: Transactional template to enable.
        categories: Category labels, sent as the ``category`` list.
        unsubscribe_group_id: Sent as ``asm_group_id``.
        unsubscribe_group_ids: Sent as ``asm_groups_to_display``.
        custom_metadata: Arbitrary extra keys. Not mutated.

    Returns:
        The merged object, or None when nothing was supplied.
    """
    fragments: list[dict[str, Any]] = [dict(custom_metadata or {})]
    if template_id is not None:
        fragments.append(_template_fragment(template_id))
    if categories:
        fragments.append({"category": list(categories)})
    if unsubscribe_group_id is not None:
        fragments.append({"asm_group_id": unsubscribe_group_id})
    if unsubscribe_group_ids:
        fragments.append({"asm_groups_to_display": list(unsubscribe_group_ids)})

    merged: dict[str, Any] = {}
    for fragment in fragments:
        merged.update(fragment)
    return merged or None


def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dumps(value: Any) -> bytes:
    """Compact JSON bytes, with enum members sent as their values."""
    return json.dumps(value, separators=(",", ":"), default=_json_default).encode("utf-8")
