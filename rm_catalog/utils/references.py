"""Cross-reference URL helpers."""

from typing import Iterable, List


def extract_reference_id(url: str) -> str:
    """Return the trailing path segment of a cross-reference URL.

    ``https://rickandmortyapi.com/api/episode/28`` -> ``"28"``. A trailing
    slash is ignored. Returns an empty string when there is no segment.
    """
    return url.rstrip("/").rsplit("/", 1)[-1]


def unique_reference_ids(urls: Iterable[str]) -> List[str]:
    """Extract identifiers from URLs, dropping duplicates and empty segments.

    First-occurrence order is preserved.
    """
    seen_ids: set[str] = set()
    ids: List[str] = []

    for url in urls:
        reference_id = extract_reference_id(url)
        if not reference_id or reference_id in seen_ids:
            continue
        seen_ids.add(reference_id)
        ids.append(reference_id)

    return ids
