"""Folium rendering of the campus, its places and an optional arched route."""

import folium

CAMPUS_CENTER = (-19.9716538355151, -43.96324375462156)
CAMPUS_BOUNDS = {
    "min_lat": -19.972541764414082,
    "max_lat": -19.96967239132942,
    "min_lon": -43.96451512163013,
    "max_lon": -43.962061590405,
}
SATELLITE_TILES = "https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}"


def campus_map(zoom_start=19):
    """Base map locked to the campus bounds: satellite imagery plus a faint OSM layer."""
    m = folium.Map(
        location=list(CAMPUS_CENTER),
        zoom_start=zoom_start,
        min_zoom=19,
        max_zoom=20,
        max_bounds=True,
        tiles=None,
        **CAMPUS_BOUNDS,
    )
    folium.TileLayer(tiles=SATELLITE_TILES, attr="&copy; Esri", max_zoom=20, max_native_zoom=19).add_to(m)
    folium.TileLayer(
        tiles="OpenStreetMap", attr="&copy; OpenStreetMap", opacity=0.1, max_zoom=20, max_native_zoom=19
    ).add_to(m)
    return m


def route_bounds(points):
    """South-west and north-east corners enclosing every point, arc included."""
    lats = [p[0] for p in points]
    lngs = [p[1] for p in points]
    return [[min(lats), min(lngs)], [max(lats), max(lngs)]]


def build_map(gazetteer=None, route=None, marker=None):
    """
    Campus map with every place, plus the route or a searched place if given.

    `route` is a RouteResult (points plus endpoints); `marker` is a
    (label, Coordinate) pair for a single searched place.
    """
    m = campus_map()

    endpoints = set()
    if route is not None:
        endpoints = {tuple(route.origin), tuple(route.destination)}

    for name in gazetteer or []:
        coord = gazetteer[name]
        if tuple(coord) in endpoints:
            continue
        folium.CircleMarker(
            location=list(coord),
            radius=4,
            popup=name,
            tooltip=name,
            color="blue",
            fill=True,
            fill_opacity=0.9,
        ).add_to(m)

    if route is not None:
        points = [list(p) for p in route.points]
        # white outline under the main line
        folium.PolyLine(points, color="white", weight=9, opacity=0.8).add_to(m)
        folium.PolyLine(points, color="#0066ff", weight=6, opacity=1).add_to(m)
        folium.Marker(list(route.origin), popup="Origin", icon=folium.Icon(color="green")).add_to(m)
        folium.Marker(list(route.destination), popup="Destination", icon=folium.Icon(color="purple")).add_to(m)
        m.fit_bounds(route_bounds(points))

    if marker is not None:
        label, coord = marker
        folium.Marker(list(coord), popup=label, tooltip=label, icon=folium.Icon(color="red")).add_to(m)

    return m


def make_map(gazetteer=None, route=None, marker=None):
    """Embeddable HTML for build_map()."""
    return build_map(gazetteer=gazetteer, route=route, marker=marker)._repr_html_()


def save_map(path, gazetteer=None, route=None):
    """Write a standalone HTML map, for the command line."""
    build_map(gazetteer=gazetteer, route=route).save(path)
    return path
