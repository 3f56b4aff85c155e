"""Geometry decomposition, hit testing and coordinate conversion for map views."""
from spatialview.cancel import CancellationToken
from spatialview.converter import AxisType, Converter, dec_to_dms
from spatialview.errors import (ConverterStateError, SpatialError, TransformationError,
                                UnsupportedProjectionError)
from spatialview.feature import Feature
from spatialview.importer import Importer
from spatialview.layer import Layer
from spatialview.primitives import Envelope, Point, ProjectionView, extend_envelope
from spatialview.projection import ProjectionKind, ProjectionRegistry, default_registry
from spatialview.rendering import PillowSurface, paint_shapes
from spatialview.shapes import ShapeContainer, ShapeType, distance_to_segment, shape_description

__version__ = "0.1.0"
