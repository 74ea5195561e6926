"""
Project file schema with Pydantic validation

Field aliases keep the camelCase keys of saved project files
(``rectId``, ``pathOrder``, ``createdAt``, ...).
"""

from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.geometry import is_orthogonal, pair_points
from ..core.models import DockPoint, DockSide, Rectangle, Room

MIN_ROOM_SIZE = 200
MIN_RECT_SIZE = 40
DEFAULT_RECT_COLOR = '#d1d5db'
PROJECT_VERSION = 1
MIN_OVERLAP_SPACING = 4
MAX_OVERLAP_SPACING = 12


class RoomModel(BaseModel):
    """Room dimensions"""
    width: float = Field(..., ge=MIN_ROOM_SIZE)
    height: float = Field(..., ge=MIN_ROOM_SIZE)

    def to_room(self) -> Room:
        return Room(width=self.width, height=self.height)


class RectModel(BaseModel):
    """Rectangle as stored in a project file"""
    id: str
    name: str = ''
    x: float
    y: float
    width: float = Field(..., ge=MIN_RECT_SIZE)
    height: float = Field(..., ge=MIN_RECT_SIZE)
    color: str = DEFAULT_RECT_COLOR

    def to_rectangle(self) -> Rectangle:
        return Rectangle(id=self.id, x=self.x, y=self.y, width=self.width, height=self.height)


class EndpointModel(BaseModel):
    """Dock reference of a path endpoint"""
    model_config = ConfigDict(populate_by_name=True)

    rect_id: str = Field(..., alias='rectId')
    side: DockSide

    def to_dock(self) -> DockPoint:
        return DockPoint(rect_id=self.rect_id, side=self.side)


class PathFields(BaseModel):
    """Free-text columns of the path table"""
    description: str = ''
    knackpunkt: str = ''
    begruendung: str = ''
    kommentar: str = ''


def check_stored_points(points: List[float]) -> List[float]:
    """
    Validate a stored coordinate list

    Empty lists are allowed (unrouted path). Anything else must hold at
    least two vertices, have even length, and be orthogonal without
    coincident consecutive vertices.

    Raises:
        ValueError: If the list is malformed
    """
    if not points:
        return points

    if len(points) % 2 != 0:
        raise ValueError(f"points must have even length, got {len(points)} values")
    if len(points) < 4:
        raise ValueError("points must hold at least two vertices")

    vertices = pair_points(points)
    for index, (a, b) in enumerate(zip(vertices, vertices[1:])):
        if a == b:
            raise ValueError(f"segment {index} is degenerate: {a} repeats")

    if not is_orthogonal(vertices):
        raise ValueError(f"points contain a diagonal segment: {points}")

    return points


class PathRowModel(BaseModel):
    """One routed path and its table row"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    from_: EndpointModel = Field(..., alias='from')
    to: EndpointModel
    points: List[float] = Field(default_factory=list)
    row_fields: PathFields = Field(default_factory=PathFields, alias='fields')
    created_at: float = Field(0, alias='createdAt')
    is_manually_edited: bool = Field(False, alias='isManuallyEdited')

    @field_validator('points')
    @classmethod
    def validate_points(cls, v):
        """Stored points must form an orthogonal, non-degenerate polyline"""
        return check_stored_points(v)

    @property
    def from_dock(self) -> DockPoint:
        return self.from_.to_dock()

    @property
    def to_dock(self) -> DockPoint:
        return self.to.to_dock()


class ProjectData(BaseModel):
    """Complete project file"""
    model_config = ConfigDict(populate_by_name=True)

    version: Literal[1] = PROJECT_VERSION
    room: RoomModel
    rects: List[RectModel] = Field(default_factory=list)
    paths: List[PathRowModel] = Field(default_factory=list)
    path_order: List[str] = Field(default_factory=list, alias='pathOrder')
    overlap_spacing: Optional[float] = Field(None, alias='overlapSpacing')

    @field_validator('overlap_spacing')
    @classmethod
    def clamp_overlap_spacing(cls, v):
        """Saved spacing is kept within the lane spacing range"""
        if v is None:
            return v
        return min(max(v, MIN_OVERLAP_SPACING), MAX_OVERLAP_SPACING)

    def to_layout(self) -> Tuple[Room, List[Rectangle]]:
        """Router input snapshot: room and rectangles"""
        return self.room.to_room(), [rect.to_rectangle() for rect in self.rects]

    def get_path(self, path_id: str) -> Optional[PathRowModel]:
        for path in self.paths:
            if path.id == path_id:
                return path
        return None

    def ordered_paths(self) -> List[PathRowModel]:
        """Paths in draw order; ids without a path are skipped"""
        ordered = []
        for path_id in self.path_order:
            path = self.get_path(path_id)
            if path is not None:
                ordered.append(path)
        return ordered

    def points_by_id(self) -> dict:
        """Mapping of path id to stored points"""
        return {path.id: list(path.points) for path in self.paths}
