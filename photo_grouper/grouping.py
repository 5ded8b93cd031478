from typing import Callable, Iterator, Sequence, TypeVar

T = TypeVar("T")


def group_by_fn(data: Sequence[T], same_group: Callable[[T, T], bool]) -> Iterator[Sequence[T]]:
    """
    Lazily splits `data` into runs of consecutive elements.

    Each element is compared against the *first* element of the current run
    (same_group(current, first)); the run ends at the first element for which
    that is False. same_group should therefore be transitive over the key you
    are grouping on, e.g. equality of a derived value.

    Concatenating the yielded slices gives back `data`. An empty input yields
    nothing. Slices of a list are new lists, but they hold the same element
    objects as `data`; nothing is copied beyond the references.
    """
    first = 0
    for i in range(1, len(data)):
        if not same_group(data[i], data[first]):
            yield data[first:i]
            first = i
    if first < len(data):
        yield data[first:]
