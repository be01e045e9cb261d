"""Passthrough payload shapes: attributions and vector tile sources."""

from typing import Literal, TypedDict


class Attributions(TypedDict, total=False):
    """Data source attributions as returned by the API."""

    html: str
    text: str
    url: str


class VectorTileSource(TypedDict):
    """Map renderer source descriptor for a tiled vector endpoint."""

    type: Literal["vector"]
    tiles: list[str]
