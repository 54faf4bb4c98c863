"""Plan catalog: static plan definitions loaded at startup."""

from src.plans.catalog import PlanCatalog, load_catalog_from_dict, load_plan_catalog
from src.plans.models import PlanInfo

__all__ = [
    "PlanCatalog",
    "PlanInfo",
    "load_catalog_from_dict",
    "load_plan_catalog",
]
