"""PWLS catalog: entities, keyed collections, loading and queries."""

from .models import (
    Company, LoggingMethod, ToolClass, Property, Curve, Tool,
    CatalogWarning, LoadReport,
)
from .collections import Companies, LoggingMethods, ToolClasses, Properties, Tools, Curves
from .hierarchy import ParentScheme, ParentRef, resolve_parents, find_cycles
from .crossref import CurveLink, link_curves
from .loader import LoadedCollections, load_collections
from .catalog import Catalog, load_catalog
from .serialization import (
    entity_to_dict, entities_to_list, catalog_to_dict, save_json, dump_catalog,
)

__all__ = [
    # Models
    "Company", "LoggingMethod", "ToolClass", "Property", "Curve", "Tool",
    "CatalogWarning", "LoadReport",
    # Collections
    "Companies", "LoggingMethods", "ToolClasses", "Properties", "Tools", "Curves",
    # Resolution
    "ParentScheme", "ParentRef", "resolve_parents", "find_cycles",
    "CurveLink", "link_curves",
    # Loading
    "LoadedCollections", "load_collections", "Catalog", "load_catalog",
    # Serialization
    "entity_to_dict", "entities_to_list", "catalog_to_dict", "save_json", "dump_catalog",
]
