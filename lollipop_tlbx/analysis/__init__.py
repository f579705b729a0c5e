"""Analysis modules: role resolution, geometry and visibility encoding."""

from .geometry import (
    CategoryAxis,
    DumbbellGeometry,
    GeometryBuilder,
    SeriesGeometry,
    StemGeometry,
    build_geometry,
    map_categories,
)
from .role_resolver import (
    ChartMode,
    ColumnRoleAssignment,
    DumbbellMode,
    RoleHints,
    RoleResolver,
    StemMode,
    resolve_classic_roles,
    resolve_roles,
)
from .visibility import (
    ConnectorRegime,
    ConnectorStyle,
    DerivedEncoding,
    EncodingDiff,
    LegendEvent,
    SeriesPalette,
    SeriesStyle,
    VisibilityState,
    diff_encodings,
    encode,
    transition,
)


__all__ = [
    "CategoryAxis",
    "ChartMode",
    "ColumnRoleAssignment",
    "ConnectorRegime",
    "ConnectorStyle",
    "DerivedEncoding",
    "DumbbellGeometry",
    "DumbbellMode",
    "EncodingDiff",
    "GeometryBuilder",
    "LegendEvent",
    "RoleHints",
    "RoleResolver",
    "SeriesGeometry",
    "SeriesPalette",
    "SeriesStyle",
    "StemGeometry",
    "StemMode",
    "VisibilityState",
    "build_geometry",
    "diff_encodings",
    "encode",
    "map_categories",
    "resolve_classic_roles",
    "resolve_roles",
    "transition",
]
