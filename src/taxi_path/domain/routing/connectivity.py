# domain/routing/connectivity.py
from dataclasses import dataclass


@dataclass(frozen=True)
class Connectivity:
    connected: bool
    shared_rank_id: str | None = None


DISCONNECTED = Connectivity(False, None)


def resolve_connectivity(
    source_ranks: tuple[str | None, str | None],
    destination_ranks: tuple[str | None, str | None],
) -> Connectivity:
    """
    Do the route near the source and the route near the destination meet at a rank?
    Arguments are (start_rank_id, end_rank_id) pairs for each route.
    """
    s_start, s_end = source_ranks
    d_start, d_end = destination_ranks
    if not (s_start and s_end and d_start and d_end):
        return DISCONNECTED

    for mine in (s_start, s_end):
        for theirs in (d_start, d_end):
            if mine == theirs:
                return Connectivity(True, mine)
    return DISCONNECTED
