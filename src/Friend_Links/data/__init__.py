"""Entry file codecs and file-backed persistence.

Re-exports the public API so consumers can import directly:
    from Friend_Links.data import EntryRepository, parse_friends_ts
"""

from Friend_Links.data.codec import (
    JSONL_CODEC,
    TS_CODEC,
    EntryCodec,
    codec_for_path,
    encode_friends_ts,
    encode_jsonl,
    parse_friends_ts,
    parse_jsonl,
)
from Friend_Links.data.repository import EntryRepository, atomic_write_text, write_failure_report

__all__ = [
    # Codecs
    "JSONL_CODEC",
    "TS_CODEC",
    "EntryCodec",
    "codec_for_path",
    "encode_friends_ts",
    "encode_jsonl",
    "parse_friends_ts",
    "parse_jsonl",
    # Repository
    "EntryRepository",
    "atomic_write_text",
    "write_failure_report",
]
