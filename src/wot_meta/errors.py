class DocMetaError(Exception):
    pass


class FetchError(DocMetaError):
    """Network acquisition failed: non-2xx status, connection error or timeout."""


class ConversionError(DocMetaError):
    """A fetched HTML page could not be turned into Markdown."""
