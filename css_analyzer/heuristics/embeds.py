"""Embedded content (``data:`` URI) sniffing."""

DATA_URI_PREFIX = "data:"


def is_data_uri(url: str) -> bool:
    return url[: len(DATA_URI_PREFIX)].lower() == DATA_URI_PREFIX


def get_embed_type(embed: str) -> str:
    """Return the media type declared by a ``data:`` URI.

    Example:
        >>> get_embed_type("data:image/gif;base64,R0lG")
        'image/gif'
    """
    body = embed[len(DATA_URI_PREFIX) :]
    end = len(body)
    for separator in (";", ","):
        index = body.find(separator)
        if index != -1:
            end = min(end, index)
    return body[:end]
