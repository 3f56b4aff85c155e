# -*- coding: utf-8 -*-

"""
spatialview/config.py

This module centralizes the tunable constants of the spatial view core. Hit-test
tolerances, the envelope sentinel, the binary payload layout and the drawing
defaults all live here so that the geometry, conversion and rendering code agree
on them.

Contents:
---------
1. HIT_TEST:
   - Pixel tolerances used by `ShapeContainer.within`.
   - Points are hit inside a radius, lines and rings within a distance band.

2. ENVELOPE_SENTINEL:
   - The inverted, out-of-range box used as "no data yet" for envelopes.

3. IMPORT:
   - Layout of binary geometry payloads: a fixed-size SRID prefix followed by
     the WKB body.

4. RENDERING:
   - Default stroke width, point marker size and layer color (RGBA, 0..1).

5. PROJECTION_WKT:
   - Well-known text definitions of the five supported coordinate reference
     systems, keyed by `ProjectionKind` name.

Usage:
------
    from spatialview.config import HIT_TEST, RENDERING

"""

# ───────────────────────────────────────────────────────────────────────────────
# 1) HIT TESTING (units of the container's coordinate space, pixels after render)
# ───────────────────────────────────────────────────────────────────────────────
HIT_TEST = {
    'point_tolerance': 4.0,     # strict: distance < tolerance
    'line_tolerance': 1.0,      # inclusive: distance <= tolerance
}

# ───────────────────────────────────────────────────────────────────────────────
# 2) ENVELOPE SENTINEL (geodetic degrees, deliberately inverted)
# ───────────────────────────────────────────────────────────────────────────────
ENVELOPE_SENTINEL = {
    'left': 180.0,
    'top': -90.0,
    'right': -180.0,
    'bottom': 90.0,
}

# ───────────────────────────────────────────────────────────────────────────────
# 3) BINARY IMPORT
# ───────────────────────────────────────────────────────────────────────────────
IMPORT = {
    'wkb_prefix_bytes': 4,          # SRID header preceding the WKB body
    'srid_byteorder': 'little',
}

# ───────────────────────────────────────────────────────────────────────────────
# 4) RENDERING
# ───────────────────────────────────────────────────────────────────────────────
RENDERING = {
    'line_width': 0.5,
    'marker_size': 5.0,                 # screen pixels, independent of zoom
    'default_color': (0.0, 0.0, 0.0, 1.0),
}

# ───────────────────────────────────────────────────────────────────────────────
# 5) PROJECTION DEFINITIONS
# ───────────────────────────────────────────────────────────────────────────────
PROJECTION_WKT = {
    'GEODETIC': (
        'GEOGCS["WGS 84",'
        'DATUM["WGS_1984",'
        'SPHEROID["WGS 84",6378137,298.257223563,AUTHORITY["EPSG","7030"]],'
        'AUTHORITY["EPSG","6326"]],'
        'PRIMEM["Greenwich",0,AUTHORITY["EPSG","8901"]],'
        'UNIT["degree",0.0174532925199433,AUTHORITY["EPSG","9122"]],'
        'AUTHORITY["EPSG","4326"]]'
    ),
    'MERCATOR': (
        'PROJCS["World_Mercator",'
        'GEOGCS["GCS_WGS_1984",'
        'DATUM["D_WGS_1984",SPHEROID["WGS_1984",6378137.0,298.257223563]],'
        'PRIMEM["Greenwich",0.0],'
        'UNIT["Degree",0.0174532925199433]],'
        'PROJECTION["Mercator"],'
        'PARAMETER["False_Easting",0.0],'
        'PARAMETER["False_Northing",0.0],'
        'PARAMETER["Central_Meridian",0.0],'
        'PARAMETER["Standard_Parallel_1",0.0],'
        'UNIT["Meter",1.0]]'
    ),
    'EQUIRECTANGULAR': (
        'PROJCS["World_Equidistant_Cylindrical",'
        'GEOGCS["GCS_WGS_1984",'
        'DATUM["D_WGS_1984",SPHEROID["WGS_1984",6378137.0,298.257223563]],'
        'PRIMEM["Greenwich",0.0],'
        'UNIT["Degree",0.0174532925199433]],'
        'PROJECTION["Equidistant_Cylindrical"],'
        'PARAMETER["False_Easting",0.0],'
        'PARAMETER["False_Northing",0.0],'
        'PARAMETER["Central_Meridian",0.0],'
        'PARAMETER["Standard_Parallel_1",60.0],'
        'UNIT["Meter",1.0]]'
    ),
    'ROBINSON': (
        'PROJCS["World_Robinson",'
        'GEOGCS["GCS_WGS_1984",'
        'DATUM["D_WGS_1984",SPHEROID["WGS_1984",6378137.0,298.257223563]],'
        'PRIMEM["Greenwich",0.0],'
        'UNIT["Degree",0.0174532925199433]],'
        'PROJECTION["Robinson"],'
        'PARAMETER["False_Easting",0.0],'
        'PARAMETER["False_Northing",0.0],'
        'PARAMETER["Central_Meridian",0.0],'
        'UNIT["Meter",1.0]]'
    ),
    'BONNE': (
        'PROJCS["World_Bonne",'
        'GEOGCS["GCS_WGS_1984",'
        'DATUM["D_WGS_1984",SPHEROID["WGS_1984",6378137.0,298.257223563]],'
        'PRIMEM["Greenwich",0.0],'
        'UNIT["Degree",0.0174532925199433]],'
        'PROJECTION["Bonne"],'
        'PARAMETER["False_Easting",0.0],'
        'PARAMETER["False_Northing",0.0],'
        'PARAMETER["Central_Meridian",0.0],'
        'PARAMETER["Standard_Parallel_1",60.0],'
        'UNIT["Meter",1.0]]'
    ),
}
