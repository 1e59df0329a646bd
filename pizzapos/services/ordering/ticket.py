"""Kitchen ticket ordering."""
from typing import Dict, List, Sequence

from pizzapos.db.models import OrderLine
from pizzapos.services.catalog.repository import DEFAULT_TICKET_PRIORITY


def sort_ticket_lines(
    lines: Sequence[OrderLine], priorities: Dict[str, int]
) -> List[OrderLine]:
    """Order lines for the kitchen: lower category priority first, otherwise as ordered."""
    return sorted(
        lines,
        key=lambda line: priorities.get(line.category_id, DEFAULT_TICKET_PRIORITY),
    )
