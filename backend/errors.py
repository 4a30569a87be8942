class ProfileLookupError(Exception):
    """Base class for failures that end a player lookup."""

    pass


class InvalidUrl(ProfileLookupError):
    """The input is not a profile URL we recognize."""

    pass


class MalformedDirectUrl(ProfileLookupError):
    """A /profiles/ URL without an identifier segment."""

    pass


class VanityResolutionFailed(ProfileLookupError):
    """The Steam API could not turn a vanity name into a Steam ID."""

    pass


class SerializationFailed(ProfileLookupError):
    pass


class CacheUnavailable(ProfileLookupError):
    """Redis could not be reached."""

    pass
