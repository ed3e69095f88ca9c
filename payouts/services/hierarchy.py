"""
Agency Hierarchy Service

Resolves the chain of ancestor agencies above a selling agency.
"""

from typing import Dict, List

from payouts.models.agency import Agency

MAX_CHAIN_DEPTH = 10


def get_parent_chain(
    agency_id: int, agency_map: Dict[int, Agency], max_depth: int = MAX_CHAIN_DEPTH
) -> List[Agency]:
    """
    Walk parent_agency_id links upward from an agency.

    The walk stops quietly when a parent is not in the lookup or after
    `max_depth` hops, so malformed or cyclic data cannot loop forever.

    Args:
        agency_id: The starting agency
        agency_map: Agencies indexed by id
        max_depth: Maximum number of hops

    Returns:
        Ancestors ordered nearest first (parent, grandparent, ...)
    """
    chain: List[Agency] = []
    current = agency_map.get(agency_id)
    depth = 0

    while current is not None and depth < max_depth:
        if current.parent_agency_id is None:
            break
        parent = agency_map.get(current.parent_agency_id)
        if parent is None:
            break
        chain.append(parent)
        current = parent
        depth += 1

    return chain
