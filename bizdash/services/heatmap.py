"""
Sector x acquisition source heatmap service.

Cross-tabulates clients over a fixed grid of sectors and sources. A client is
counted in a cell when its sector text contains the sector label and its source
text contains the source label, both case-insensitive:

    sector "Tecnologia e Inovação" + source "Indicação Direta"
        -> cell (Tecnologia, Indicação)

Intensity is a linear normalization capped at 1:

    intensity = min(count / saturation, 1)    (saturation defaults to 5)

Clients whose sector or source matches none of the labels are left out of the
grid; that is not an error.
"""

from typing import List, Optional, Sequence

import numpy as np

from bizdash.models import Client, HeatmapCell, SectorHeatmap


HEATMAP_SECTORS = ["Tecnologia", "Marketing", "Consultoria"]

HEATMAP_SOURCES = ["Indicação", "Google Ads", "LinkedIn"]

# Client count at which a cell reaches full intensity
DEFAULT_SATURATION_COUNT = 5


def matches_label(text: str, label: str) -> bool:
    """
    Case-insensitive substring match used for sectors and sources.

    casefold() keeps accented labels such as "Indicação" matching regardless of
    case.
    """
    return label.casefold() in text.casefold()


def count_matrix(
    clients: Sequence[Client],
    sectors: Sequence[str],
    sources: Sequence[str],
) -> np.ndarray:
    """
    Count clients per (sector, source) pair.

    Args:
        clients: Client collection
        sectors: Row labels
        sources: Column labels

    Returns:
        Integer array of shape (len(sectors), len(sources))
    """
    counts = np.zeros((len(sectors), len(sources)), dtype=int)
    for client in clients:
        for i, sector in enumerate(sectors):
            if not matches_label(client.sector, sector):
                continue
            for j, source in enumerate(sources):
                if matches_label(client.source, source):
                    counts[i, j] += 1
    return counts


def build_sector_heatmap(
    clients: Optional[Sequence[Client]],
    sectors: Sequence[str] = HEATMAP_SECTORS,
    sources: Sequence[str] = HEATMAP_SOURCES,
    saturation_count: int = DEFAULT_SATURATION_COUNT,
) -> SectorHeatmap:
    """
    Build the sector x source heatmap.

    Args:
        clients: Client collection, or None when not loaded
        sectors: Sector labels (rows), fixed by default
        sources: Source labels (columns), fixed by default
        saturation_count: Count mapped to intensity 1.0, must be positive

    Returns:
        SectorHeatmap with cells in sector-major order

    Raises:
        ValueError: If saturation_count is not positive.

    Example:
        >>> heatmap = build_sector_heatmap([])
        >>> len(heatmap.cells), heatmap.maxCount
        (9, 0)
    """
    if saturation_count <= 0:
        raise ValueError(f"saturation_count must be positive, got {saturation_count}")

    counts = count_matrix(clients or [], sectors, sources)
    intensity = np.minimum(counts / saturation_count, 1.0)

    cells: List[HeatmapCell] = []
    for i, sector in enumerate(sectors):
        for j, source in enumerate(sources):
            cells.append(HeatmapCell(
                sector=sector,
                source=source,
                count=int(counts[i, j]),
                intensity=float(intensity[i, j]),
            ))

    return SectorHeatmap(
        sectors=list(sectors),
        sources=list(sources),
        cells=cells,
        maxCount=int(counts.max()) if counts.size else 0,
    )
