"""Classification of blob contents."""

BINARY_SENTINEL = "Binary file"
DELETED_SENTINEL = "File deleted"

# Same window git uses to guess whether a blob is binary
BINARY_PROBE_SIZE = 8000


def is_binary(content: bytes) -> bool:
    """A blob is binary when its first 8000 bytes contain a zero byte."""
    return b"\x00" in content[:BINARY_PROBE_SIZE]


def decode_content(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


def count_lines(text: str) -> int:
    return len(text.strip().splitlines())
