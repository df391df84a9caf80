"""Page selectors and their resolution into zero-based page indices.

A selector arrives as one of three shapes: every page, an unordered list of 1-based
page numbers, or a list of inclusive 1-based ranges. :func:`resolve` turns any of
them into a sorted, de-duplicated list of indices valid for a given page count.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Union

from ..exceptions import InvalidSelectorError, NoValidPagesError


@dataclass(frozen=True)
class PageRange:
    """Represents an inclusive, 1-based page range."""

    start: int
    end: int

    def label(self) -> str:
        return f"{self.start}-{self.end}"

    @property
    def page_count(self) -> int:
        return self.end - self.start + 1

    def indices(self) -> range:
        return range(self.start - 1, self.end)


@dataclass(frozen=True)
class AllPages:
    """Selects every page of a document."""


@dataclass(frozen=True)
class PageNumbers:
    """Selects explicit 1-based page numbers; out-of-range numbers are dropped."""

    numbers: tuple[int, ...]


@dataclass(frozen=True)
class PageRanges:
    """Selects inclusive 1-based ranges; every range must fit the document."""

    ranges: tuple[PageRange, ...]


PageSelector = Union[AllPages, PageNumbers, PageRanges]

ALL_PAGES = AllPages()


def _to_int(value: object, *, source: object) -> int:
    if isinstance(value, bool):
        raise InvalidSelectorError(f"Invalid page number: {source!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip():
        try:
            return int(value.strip())
        except ValueError as exc:
            raise InvalidSelectorError(f"Invalid page number: {source!r}") from exc
    raise InvalidSelectorError(f"Invalid page number: {source!r}")


def _parse_range(item: object) -> PageRange:
    if isinstance(item, PageRange):
        return item
    if isinstance(item, Mapping):
        if "start" not in item or "end" not in item:
            raise InvalidSelectorError(f"Page range requires start and end: {dict(item)!r}")
        return PageRange(_to_int(item["start"], source=item), _to_int(item["end"], source=item))
    if isinstance(item, str):
        token = item.strip()
        if "-" in token:
            start_str, end_str = token.split("-", 1)
            return PageRange(_to_int(start_str, source=item), _to_int(end_str, source=item))
        number = _to_int(token, source=item)
        return PageRange(number, number)
    if isinstance(item, Sequence) and len(item) == 2:
        return PageRange(_to_int(item[0], source=item), _to_int(item[1], source=item))
    if isinstance(item, int) and not isinstance(item, bool):
        return PageRange(item, item)
    raise InvalidSelectorError(f"Invalid page range: {item!r}")


def parse_ranges(value: object) -> List[PageRange]:
    """Parse a list of ``{start, end}`` mappings, pairs or ``"a-b"`` strings."""

    if isinstance(value, str):
        items: Iterable[object] = [token for token in value.split(",") if token.strip()]
    elif isinstance(value, Sequence):
        items = value
    else:
        raise InvalidSelectorError(f"Page ranges must be a list, got {value!r}")
    return [_parse_range(item) for item in items]


def parse_page_numbers(value: object) -> List[int]:
    """Parse a list of page numbers; numeric strings are accepted."""

    if isinstance(value, str):
        items: Iterable[object] = [token for token in value.split(",") if token.strip()]
    elif isinstance(value, Sequence):
        items = value
    else:
        raise InvalidSelectorError(f"Pages must be a list of page numbers, got {value!r}")
    return [_to_int(item, source=item) for item in items]


def parse_selector(value: object, *, default: PageSelector = ALL_PAGES) -> PageSelector:
    """Map a JSON-shaped ``pages`` field to a selector variant."""

    if isinstance(value, (AllPages, PageNumbers, PageRanges)):
        return value
    if value is None:
        return default
    if isinstance(value, str) and value.strip().lower() == "all":
        return ALL_PAGES
    if isinstance(value, (list, tuple)) and value and all(
        isinstance(item, (Mapping, PageRange)) for item in value
    ):
        return PageRanges(tuple(parse_ranges(value)))
    return PageNumbers(tuple(parse_page_numbers(value)))


def resolve_ranges(selector: PageSelector, page_count: int) -> List[PageRange]:
    """Validate every range of ``selector`` against ``page_count``.

    Unlike page numbers, a single invalid range fails the whole call.
    """

    if isinstance(selector, AllPages):
        return [PageRange(number, number) for number in range(1, page_count + 1)]
    if isinstance(selector, PageNumbers):
        candidates = [PageRange(number, number) for number in selector.numbers]
    else:
        candidates = list(selector.ranges)

    for page_range in candidates:
        if page_range.start < 1 or page_range.end > page_count or page_range.start > page_range.end:
            raise InvalidSelectorError(
                f"Invalid range: {page_range.label()}. PDF has {page_count} pages."
            )
    return candidates


def resolve(selector: PageSelector, page_count: int) -> List[int]:
    """Return ascending unique zero-based indices selected by ``selector``."""

    if isinstance(selector, AllPages):
        return list(range(page_count))
    if isinstance(selector, PageNumbers):
        return sorted({number - 1 for number in selector.numbers if 1 <= number <= page_count})
    indices: set[int] = set()
    for page_range in resolve_ranges(selector, page_count):
        indices.update(page_range.indices())
    return sorted(indices)


def require_pages(indices: Sequence[int], page_count: int, message: str = "") -> List[int]:
    """Fail with :class:`NoValidPagesError` when nothing survived filtering."""

    if not indices:
        raise NoValidPagesError(message, page_count=page_count)
    return list(indices)


def page_numbers(indices: Iterable[int]) -> List[int]:
    """Convert zero-based indices back into 1-based page numbers."""

    return [index + 1 for index in indices]


__all__ = [
    "PageRange",
    "AllPages",
    "PageNumbers",
    "PageRanges",
    "PageSelector",
    "ALL_PAGES",
    "parse_ranges",
    "parse_page_numbers",
    "parse_selector",
    "resolve_ranges",
    "resolve",
    "require_pages",
    "page_numbers",
]
