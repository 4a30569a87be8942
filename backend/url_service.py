from urllib.parse import urlsplit, urlunsplit

from errors import InvalidUrl

# --- Recognized Profile Shapes ---
VANITY_SEGMENT = "id"
DIRECT_SEGMENT = "profiles"
PROFILE_SEGMENTS = (VANITY_SEGMENT, DIRECT_SEGMENT)


def path_segments(url: str) -> list[str]:
    """Returns the non-empty path segments of a URL."""
    return [segment for segment in urlsplit(url).path.split("/") if segment]


def normalize_url(raw_url: str) -> str:
    """
    Turns any Steam community profile URL into its canonical form,
    e.g. 'https://steamcommunity.com/profiles/7656.../?l=german' becomes
    'https://steamcommunity.com/profiles/7656...'.
    Raises InvalidUrl if the input is not an id/ or profiles/ URL.
    """
    try:
        parts = urlsplit(raw_url.strip())
    except (AttributeError, ValueError) as e:
        raise InvalidUrl(f"Could not parse URL: {raw_url!r}") from e

    if parts.scheme.lower() not in ("http", "https") or not parts.netloc:
        raise InvalidUrl(f"Not an absolute http(s) URL: {raw_url!r}")

    segments = [segment for segment in parts.path.split("/") if segment]
    if len(segments) < 2:
        raise InvalidUrl(f"Expected a profile URL with two path segments: {raw_url!r}")
    if segments[0] not in PROFILE_SEGMENTS:
        raise InvalidUrl(
            f"Unsupported profile URL, path must start with /id/ or /profiles/: {raw_url!r}"
        )

    path = f"/{segments[0]}/{segments[1]}"
    return urlunsplit((parts.scheme.lower(), parts.netloc.lower(), path, "", ""))


def get_cache_key(normalized_url: str) -> str:
    """The normalized URL is the cache key, no prefix."""
    return normalized_url
