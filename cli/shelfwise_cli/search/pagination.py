"""Compact pagination strip computation."""

from typing import Union

ELLIPSIS = "ellipsis"

PageMarker = Union[int, str]


def page_window(
    current_page: int,
    total_pages: int,
    window_size: int = 2,
) -> list[PageMarker]:
    """Return the page markers to render for a pagination strip.

    Pages are zero-based. Small page counts are listed in full; larger ones
    keep the first page, the last page and ``window_size`` pages on each side
    of the current page, with ``ELLIPSIS`` standing in for the gaps.

    Out-of-range input is clamped rather than rejected.
    """
    pages: list[PageMarker] = []

    if total_pages <= 0:
        return pages

    window_size = max(0, window_size)
    current_page = min(max(0, current_page), total_pages - 1)

    # Show everything when it fits
    if total_pages <= 7 + window_size * 2:
        return list(range(total_pages))

    left = max(0, current_page - window_size)
    right = min(total_pages - 1, current_page + window_size)

    if left > 1:
        pages.append(0)
        pages.append(ELLIPSIS)
    else:
        pages.extend(range(0, left))

    pages.extend(range(left, right + 1))

    if right < total_pages - 2:
        pages.append(ELLIPSIS)
        pages.append(total_pages - 1)
    else:
        pages.extend(range(right + 1, total_pages))

    return pages


def is_ellipsis(marker: PageMarker) -> bool:
    """Check whether a marker is a gap rather than a page index."""
    return marker == ELLIPSIS
