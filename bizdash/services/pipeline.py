"""
Pipeline status grouping for the project pipeline chart.

Counts projects per pipeline stage:

    discovery   -> Discovery
    development -> Desenvolvimento
    delivery    -> Entrega
    post_sale   -> Pós-venda

Stages with no projects are omitted. Completed and cancelled projects are not
pipeline stages and are skipped.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from bizdash.models import PipelineSlice, Project, ProjectStatus


# Ordered stage -> (label, color)
PIPELINE_STAGES: Dict[ProjectStatus, Tuple[str, str]] = {
    ProjectStatus.DISCOVERY: ("Discovery", "#9333ea"),
    ProjectStatus.DEVELOPMENT: ("Desenvolvimento", "#387DF3"),
    ProjectStatus.DELIVERY: ("Entrega", "#22c55e"),
    ProjectStatus.POST_SALE: ("Pós-venda", "#f59e0b"),
}


def count_by_stage(projects: Optional[Sequence[Project]]) -> Dict[ProjectStatus, int]:
    """
    Count projects per pipeline stage.

    Returns:
        Mapping with every pipeline stage as a key, in stage order
    """
    counts: Dict[ProjectStatus, int] = {stage: 0 for stage in PIPELINE_STAGES}
    for project in projects or []:
        if project.status not in counts:
            # completed / cancelled: outside the pipeline
            continue
        counts[project.status] += 1
    return counts


def group_pipeline(projects: Optional[Sequence[Project]]) -> List[PipelineSlice]:
    """
    Group projects by pipeline stage for the proportion chart.

    Args:
        projects: Project collection, or None when not loaded

    Returns:
        Slices in stage order, zero-count stages omitted. percentage is the
        share of the counted pipeline projects.

    Example:
        >>> group_pipeline([])
        []
    """
    counts = count_by_stage(projects)
    total = sum(counts.values())

    slices: List[PipelineSlice] = []
    for stage, (label, color) in PIPELINE_STAGES.items():
        count = counts[stage]
        if count == 0:
            continue
        slices.append(PipelineSlice(
            stage=stage,
            label=label,
            count=count,
            percentage=count / total * 100,
            color=color,
        ))
    return slices
