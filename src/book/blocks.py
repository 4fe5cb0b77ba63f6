"""Block sequence pruning shared by the extractors."""

from typing import AbstractSet, List, Sequence, Tuple, TypeVar

from src.block_store.models import Block

T = TypeVar('T')


def remove_blocks(items: Sequence[T], to_remove: AbstractSet[int]) -> List[T]:
    """Return a new list without the elements whose indexes are in to_remove.

    Survivors keep their relative order.

    Example:
        >>> remove_blocks(["a", "b", "c", "d"], {1, 3})
        ['a', 'c']
    """
    return [item for i, item in enumerate(items) if i not in to_remove]


def prune_blocks(
    blocks: Sequence[Block],
    block_ids: Sequence[str],
    to_remove: AbstractSet[int]
) -> Tuple[List[Block], List[str]]:
    """Return pruned copies of a block sequence and its parallel id sequence.

    Both sequences are filtered with the same index set so they stay parallel.
    """
    return remove_blocks(blocks, to_remove), remove_blocks(block_ids, to_remove)
