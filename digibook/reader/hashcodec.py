"""
HashCodec - Parse and build the URL fragment that mirrors navigation.

Fragment format:
    #h5pbookid=<int>&chapter=<int>[&section=<str>]

Pure functions, no state. Decoding never raises; turning a decoded fragment
into a NavigationRequest does, with the errors from .errors.
"""

from typing import Optional

from digibook.schemas import NavigationRequest

from .errors import ForeignBookId, MalformedHash


BOOK_ID_KEY = "h5pbookid"
CHAPTER_KEY = "chapter"
SECTION_KEY = "section"


def decode(fragment: Optional[str]) -> dict[str, Optional[str]]:
    """
    Split a fragment into key/value pairs.

    Keys without "=" map to None. Empty segments are skipped. Anything that
    is not a string decodes to an empty mapping.
    """
    if not isinstance(fragment, str):
        return {}

    result: dict[str, Optional[str]] = {}
    for pair in fragment.lstrip("#").split("&"):
        if not pair:
            continue
        key, sep, value = pair.partition("=")
        if not key:
            continue
        result[key] = value if sep else None
    return result


def encode(request: NavigationRequest) -> str:
    """Build the fragment body (without "#") for a request."""
    fragment = f"{BOOK_ID_KEY}={request.h5pbookid}&{CHAPTER_KEY}={request.chapter}"
    if request.section is not None:
        fragment += f"&{SECTION_KEY}={request.section}"
    return fragment


def to_fragment(request: NavigationRequest) -> str:
    """Build the full fragment, including the leading "#"."""
    return "#" + encode(request)


def _as_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def belongs_to_this_book(decoded: dict[str, Optional[str]], book_id: int) -> bool:
    """True iff the decoded fragment names this book."""
    return _as_int(decoded.get(BOOK_ID_KEY)) == book_id


def has_book_id(decoded: dict[str, Optional[str]]) -> bool:
    """True when the fragment names some book, valid or not."""
    return bool(decoded.get(BOOK_ID_KEY))


def parse_request(decoded: dict[str, Optional[str]], book_id: int) -> NavigationRequest:
    """
    Turn a decoded fragment into a browser-history NavigationRequest.

    Raises:
        ForeignBookId: fragment is for another book
        MalformedHash: chapter missing or not a non-negative integer
    """
    if not belongs_to_this_book(decoded, book_id):
        raise ForeignBookId(decoded.get(BOOK_ID_KEY), book_id)

    chapter = _as_int(decoded.get(CHAPTER_KEY))
    if chapter is None or chapter < 0:
        raise MalformedHash(f"No usable chapter in fragment: {decoded!r}")

    section = decoded.get(SECTION_KEY) or None
    return NavigationRequest(
        h5pbookid=book_id,
        chapter=chapter,
        section=section,
        redirect_from_component=False,
    )


def is_same_target(decoded: dict[str, Optional[str]], request: NavigationRequest) -> bool:
    """
    Field-by-field comparison of a decoded fragment against a request.

    Key order in the fragment is irrelevant. Book id and chapter compare
    numerically; an absent section equals an empty one.
    """
    if not decoded:
        return False
    if _as_int(decoded.get(BOOK_ID_KEY)) != request.h5pbookid:
        return False
    if _as_int(decoded.get(CHAPTER_KEY)) != request.chapter:
        return False
    return (decoded.get(SECTION_KEY) or None) == request.section
