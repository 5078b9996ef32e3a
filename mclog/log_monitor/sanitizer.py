"""Chat text cleanup."""

CHAT_TAG = "[CHAT] "

# U+FFFD is what the section sign decodes to when the client writes the log
# in a legacy code page.
FORMAT_DELIMITERS = ("§", "\ufffd")


def sanitize(line: str) -> str:
    """Return the chat message of a log line without formatting codes.

    The message is everything after the first chat tag, so a player typing
    the tag themselves keeps it in their text. Each formatting delimiter is
    removed together with the code character that follows it.

    >>> sanitize("[12:00:02] [Client thread/INFO]: [CHAT] §9PlayerOne: §fHello")
    'PlayerOne: Hello'
    """
    _, tag, message = line.partition(CHAT_TAG)
    text = message if tag else line

    for delimiter in FORMAT_DELIMITERS[1:]:
        text = text.replace(delimiter, FORMAT_DELIMITERS[0])

    head, *segments = text.split(FORMAT_DELIMITERS[0])
    return head + "".join(segment[1:] for segment in segments)
