"""
Permutation helpers used by culling.

Purpose:
	Rank a sequence under a comparator and reorder other sequences by
	that ranking without building reordered copies.

Convention:
	A permutation maps each original index to its rank: permutation[i] is
	the position the element currently at index i moves to. Ranking
	[30, 10, 20] gives [2, 0, 1]; applying that to [a, b, c] gives [b, c, a].
"""

import functools
from typing import Any, Callable, List, MutableSequence, Optional, Sequence

from genetics.errors import PermutationError


def sort_to_permutation(
	values: Sequence[Any],
	comparator: Optional[Callable[[Any, Any], int]] = None,
) -> List[int]:
	"""
	Compute the rank of every element under an ordering.

	Args:
		values: Sequence to rank. Not modified.
		comparator: cmp-style function (negative, zero, positive). None ranks
			ascending with the elements' own `<`.

	Returns:
		List where entry i is the rank of values[i]. Equal elements receive
		distinct ranks in whatever order the sort leaves them.
	"""
	if comparator is None:
		key = values.__getitem__
	else:
		cmp_key = functools.cmp_to_key(comparator)

		def key(index):
			return cmp_key(values[index])

	order = sorted(range(len(values)), key=key)
	permutation = [0] * len(values)
	for rank, index in enumerate(order):
		permutation[index] = rank
	return permutation


def apply_permutation_in_place(
	sequence: MutableSequence[Any],
	permutation: MutableSequence[int],
) -> None:
	"""
	Move sequence[i] to position permutation[i] for every i.

	Follows permutation cycles with pairwise swaps: O(n) swaps and no extra
	storage. The permutation is consumed (left as the identity), so pass a
	copy if it is needed again. It is checked before anything moves, so on
	error both arguments are left as they were.

	Args:
		sequence: Sequence to reorder in place.
		permutation: Index-to-rank mapping from sort_to_permutation().

	Raises:
		PermutationError: If the lengths differ or the permutation is not a
			rearrangement of range(len(sequence)).
	"""
	size = len(sequence)
	if len(permutation) != size:
		raise PermutationError(
			f"Permutation of length {len(permutation)} applied to sequence of length {size}"
		)
	_check_permutation(permutation, size)

	for i in range(size):
		while permutation[i] != i:
			target = permutation[i]
			sequence[i], sequence[target] = sequence[target], sequence[i]
			permutation[i], permutation[target] = permutation[target], permutation[i]


def _check_permutation(permutation: MutableSequence[int], size: int) -> None:
	"""
	Raise PermutationError unless permutation holds each of range(size) once.

	Seen targets are marked by bitwise complement in place, then restored, so
	the check needs no extra storage and leaves the permutation unchanged.
	"""
	for i, target in enumerate(permutation):
		if not 0 <= target < size:
			raise PermutationError(f"Not a permutation: index {i} maps to {target}")

	duplicate = None
	for i in range(size):
		target = permutation[i]
		if target < 0:
			target = ~target
		if permutation[target] < 0:
			duplicate = (i, target)
			break
		permutation[target] = ~permutation[target]

	for i in range(size):
		if permutation[i] < 0:
			permutation[i] = ~permutation[i]

	if duplicate is not None:
		raise PermutationError(f"Not a permutation: index {duplicate[0]} maps to {duplicate[1]} twice")
