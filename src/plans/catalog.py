"""Plan catalog loader.

The catalog maps plan ids (e.g. ``12h-u``) to their price, included hours
and label. It is read from YAML once at startup and never mutated after.
"""

from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pydantic import ValidationError
from ruamel.yaml import YAML

from src.core.errors import PlanCatalogError
from src.plans.models import PlanInfo


class PlanCatalog(Mapping[str, PlanInfo]):
    """Read-only mapping of plan id to PlanInfo."""

    def __init__(self, plans: Mapping[str, PlanInfo]):
        if not plans:
            raise PlanCatalogError("Plan catalog is empty")
        self._plans: Mapping[str, PlanInfo] = MappingProxyType(dict(plans))

    def __getitem__(self, plan_id: str) -> PlanInfo:
        return self._plans[plan_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._plans)

    def __len__(self) -> int:
        return len(self._plans)

    def get_plan_info(self, plan_id: object) -> PlanInfo | None:
        """Resolve a plan id, returning None for unknown or non-string ids."""
        if not isinstance(plan_id, str):
            return None
        return self._plans.get(plan_id)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Serialize the catalog for the plans endpoint."""
        return {plan_id: info.model_dump() for plan_id, info in self._plans.items()}


def _parse_yaml(path: Path) -> dict[str, Any]:
    """Parse the catalog YAML file into a plain dictionary.

    Raises:
        PlanCatalogError: If the file cannot be read or is not a mapping.
    """
    yaml = YAML(typ="safe")

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.load(f)
    except FileNotFoundError:
        raise PlanCatalogError(f"Plan catalog not found: {path}", path=path)
    except Exception as e:
        raise PlanCatalogError(f"Failed to parse plan catalog: {e}", path=path)

    if data is None:
        raise PlanCatalogError("Plan catalog is empty", path=path)

    if not isinstance(data, dict):
        raise PlanCatalogError(
            f"Plan catalog must be a YAML mapping, got {type(data).__name__}",
            path=path,
        )

    return dict(data)


def load_catalog_from_dict(
    data: Mapping[str, Any], path: Path | None = None
) -> PlanCatalog:
    """Build a catalog from raw ``{plan_id: {price, hours, label}}`` data.

    Raises:
        PlanCatalogError: If any entry fails validation or the data is empty.
    """
    plans: dict[str, PlanInfo] = {}
    errors: list[str] = []

    for plan_id, entry in data.items():
        key = str(plan_id).strip()
        if not key:
            errors.append("plan id cannot be empty")
            continue
        try:
            plans[key] = PlanInfo.model_validate(entry)
        except ValidationError as e:
            errors.extend(f"{key}: {err['msg']}" for err in e.errors())

    if errors:
        raise PlanCatalogError(
            f"Invalid plan catalog: {errors[0]}", path=path, errors=errors
        )
    if not plans:
        raise PlanCatalogError("Plan catalog is empty", path=path)

    return PlanCatalog(plans)


def load_plan_catalog(path: str | Path) -> PlanCatalog:
    """Load and validate the plan catalog from a YAML file."""
    path = Path(path)
    return load_catalog_from_dict(_parse_yaml(path), path=path)
