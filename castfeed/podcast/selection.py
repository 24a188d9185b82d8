"""Item selection and ordering for feed generation."""

from typing import Callable, Sequence

from castfeed.content.models import Item, as_utc

ItemPredicate = Callable[[Item], bool]


def select_items(
    items: Sequence[Item],
    exclude: ItemPredicate | None = None,
    limit: int | None = None,
) -> list[Item]:
    """Select the items that should appear in a feed.

    This function:
    1. Sorts items by creation date descending (stable, so ties keep input order;
       naive dates count as UTC)
    2. Removes every item the exclusion predicate matches
    3. Keeps at most ``limit`` items when a limit is given

    Args:
        items: The section's items, in any order
        exclude: Optional predicate returning True for items to leave out
        limit: Optional maximum number of items to keep

    Returns:
        A new list of items, newest first
    """
    selected = sorted(items, key=lambda i: as_utc(i.date), reverse=True)

    if exclude is not None:
        selected = [i for i in selected if not exclude(i)]

    if limit is not None:
        selected = selected[:limit]

    return selected
